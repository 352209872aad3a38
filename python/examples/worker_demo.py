import threading, time
from typing import Optional

from opentelemetry.context import get_current
from logwrap import Wrapper, init, log, parse, shutdown, with_logger
import structlog

class Flusher:
    """Library-style background flusher: nobody is left to return errors to."""

    def __init__(self, logger: Optional[Wrapper] = None):
        self.logger = logger
        self._thread = threading.Thread(target=self._run, daemon=True)

    def start(self):
        self._thread.start()

    def join(self):
        self._thread.join()

    def _run(self):
        ctx = with_logger(structlog.get_logger("flusher").bind(worker="flusher"), get_current())
        for attempt in range(3):
            log(self.logger, ctx, f"flush attempt {attempt} failed: connection reset")
            time.sleep(0.1)

def main():
    init(service_name="py-worker", default_wrapper=parse("structlog:error"))
    f = Flusher()  # unset: resolves to the default on every call
    f.start()
    f.join()

    g = Flusher(parse("std"))
    g.start()
    g.join()
    shutdown()

if __name__ == "__main__":
    main()
