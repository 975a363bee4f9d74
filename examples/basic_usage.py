#!/usr/bin/env python3
"""Basic usage example"""

import logging
import os

from debug_stream import DebugStreamBuilder, DebugStreamHandler, LogLevel, serializers

def main():
    # Create stream with builder pattern
    stream = (DebugStreamBuilder()
        .with_basepath(os.path.dirname(os.path.abspath(__file__)))
        .with_colors(True, force=True)
        .with_process("example")
        .add_prefixer("req_id", lambda value, ctx: str(value))
        .build())

    # Write entries directly
    stream.write({"level": LogLevel.INFO, "msg": "Application started", "name": "app", "pid": os.getpid()})
    stream.write({"level": LogLevel.DEBUG, "msg": "Config loaded", "name": "app", "pid": os.getpid(),
                  "req_id": "r-1", "settings": {"port": 8080}})
    stream.write({
        "level": LogLevel.INFO,
        "msg": "request finish",
        "name": "app",
        "pid": os.getpid(),
        "req": {"method": "GET", "url": "/index.html", "headers": {"host": "localhost"}},
        "res": {"statusCode": 200, "responseTime": 12, "headers": {"content-length": 512}},
    })

    try:
        {}["missing"]
    except KeyError as e:
        stream.write({"level": LogLevel.ERROR, "msg": "Lookup failed", "name": "app",
                      "pid": os.getpid(), "err": serializers.err(e)})

    # Or route the logging module through it
    logger = logging.getLogger("example")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(DebugStreamHandler(stream, include_src=True))
    logger.warning("This is warning", extra={"retries": 3})

    stream.flush()

if __name__ == "__main__":
    main()
