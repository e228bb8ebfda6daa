from contextlib import contextmanager

_suppressed = False


def log(message=""):
    if not _suppressed:
        print(message)


def log_start(message):
    """Print without a newline, finish the line with a later log()."""
    if not _suppressed:
        print(message, end="", flush=True)


@contextmanager
def quiet():
    global _suppressed
    previous = _suppressed
    _suppressed = True
    try:
        yield
    finally:
        _suppressed = previous
