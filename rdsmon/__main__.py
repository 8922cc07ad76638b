from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from .config import default_config_path, load_config
from .logging_setup import configure_logging
from .session import DecoderSession, open_source

logger = logging.getLogger(__name__)


def _host_port(value: str) -> tuple[str, int]:
    host, sep, port = value.rpartition(":")
    if not sep or not host:
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {value!r}")
    try:
        return host, int(port)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"bad port in {value!r}") from exc


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="RDS/RBDS group decoder")
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=os.environ.get("RDSMON_CONFIG", default_config_path()),
        help="Path to YAML config file",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--hex", type=str, default=None, help="Replay a hex group file")
    source.add_argument(
        "--tcp",
        type=_host_port,
        default=None,
        metavar="HOST:PORT",
        help="Read groups from a TCP tuner",
    )
    parser.add_argument("--freq", type=int, default=None, help="Tune the TCP tuner (kHz)")
    parser.add_argument("--rbds", action="store_true", help="Use RBDS labels and call letters")
    parser.add_argument("--serve", action="store_true", help="Serve the status API while decoding")
    parser.add_argument("--bind", type=str, default=None, help="Override API bind address")
    parser.add_argument("--port", type=int, default=None, help="Override API port")
    parser.add_argument("--log-level", type=str, default=None, help="Override log level")
    parser.add_argument("--json", action="store_true", help="Print the final station as JSON")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    cfg = load_config(args.config)
    if args.hex is not None:
        cfg.source.kind = "hexfile"
        cfg.source.path = args.hex
    if args.tcp is not None:
        cfg.source.kind = "tcp"
        cfg.source.host, cfg.source.port = args.tcp
    if args.freq is not None:
        cfg.source.frequency_khz = args.freq
    if args.rbds:
        cfg.decoder.rbds = True
    if args.bind is not None:
        cfg.server.bind_address = args.bind
    if args.port is not None:
        cfg.server.port = args.port

    configure_logging(cfg.logging, level_override=args.log_level)

    try:
        source = open_source(cfg.source)
    except (OSError, ValueError) as e:
        logger.error("Cannot open group source: %s", e)
        return 1

    session = DecoderSession(cfg)

    if args.serve:
        import uvicorn

        from .app import create_app

        session.start(source)
        uvicorn.run(
            create_app(cfg, session),
            host=cfg.server.bind_address,
            port=cfg.server.port,
            log_level="info",
        )
        return 0

    try:
        groups = session.run(source)
    except ValueError as e:
        logger.error("Decoding stopped: %s", e)
        return 1
    logger.info("Decoded %d groups", groups)
    station = session.station
    model = session.station_snapshot()
    if station is not None and model is not None:
        if args.json:
            print(model.model_dump_json(indent=2))
        else:
            print(f"PI={model.pi}  PS=\"{model.ps}\"  RT=\"{model.radioText}\"")
            print(f"Groups: {station.group_stats_text()}")
            print(f"DI: {station.di_text()}")
            for on in station.other_networks():
                print(f"ON: {on!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
