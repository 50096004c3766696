import sys

import ctxlog
from ctxlog import BACKGROUND


class RequestIdKey:
    pass


# a stand-in for a web framework: a middleware puts the request id into the
# context, and every log in the request scope carries it.


def logging_middleware(next_handler):
    def handler(ctx, path):
        ctx = ctx.with_value(RequestIdKey, "6c8b715a-dfe3-40bd-8634-40312fa05897")

        ctxlog.info_context(ctx, "start request", path=path)
        body = next_handler(ctx, path)
        ctxlog.info_context(ctx, "end request", code=200)
        return body

    return handler


def hello_world(ctx, path):
    ctxlog.info_context(ctx, "start hello")
    body = "Hello World"
    ctxlog.info_context(ctx, "end hello")
    return body


def main():
    # output requestId whenever the context carries one
    ctxlog.add_context_attrs(
        ctxlog.context_attr("requestId", None, ctxlog.value_getter(RequestIdKey, str))
    )
    # JSON lines on stdout
    ctxlog.set_console_sink(sys.stdout, format="json")

    app = logging_middleware(hello_world)
    print(app(BACKGROUND, "/"))


if __name__ == "__main__":
    main()
