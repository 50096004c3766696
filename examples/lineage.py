import ctxlog
from ctxlog import BACKGROUND

# this example shows how logId and parentLogId tie the logs of a main task
# to the logs of its sub tasks.


def sub(ctx, i):
    ctxlog.info_context(ctx, f"start: sub process {i}")
    # do something
    ctxlog.info_context(ctx, f"end  : sub process {i}")


def main():
    ctx = ctxlog.with_log_context(BACKGROUND)

    ctxlog.info_context(ctx, "start: main")

    for i in range(3):
        sub(ctxlog.with_child_log_context(ctx), i)

    ctxlog.info_context(ctx, "end  : main")

    # the same, with loggers bound to their contexts
    ctx, logger = ctxlog.bind(BACKGROUND)
    logger.info("start: bound main")
    for i in range(3):
        _, child = ctxlog.bind_child(ctx)
        child.info("sub process", i=i)
    logger.info("end  : bound main")


if __name__ == "__main__":
    main()
