"""
ParaLens entry point.

Run with: python main.py <vault-dir> [--config config.yaml] [--now 2024-06-01T12:00:00+00:00]

Prints the full analytics report as JSON.
"""

import argparse
import sys
from datetime import UTC, datetime
from pathlib import Path

from paralens.config import Config
from paralens.core.vault_reader import MarkdownVaultReader
from paralens.services import ParaAnalyticsEngine, VaultCollector
from paralens.utils import ConfigurationError, ParaLensError, setup_logging
from paralens.utils.timeutil import to_datetime


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="PARA vault analytics")
    parser.add_argument("vault", help="Path to the markdown vault")
    parser.add_argument("--config", help="YAML config file (env vars still override)")
    parser.add_argument("--now", help="Reference time as ISO datetime (default: current time)")
    args = parser.parse_args(argv)

    try:
        if args.config and not Path(args.config).is_file():
            raise ConfigurationError(f"Config file not found: {args.config}")
        config = Config.from_env_or_yaml(yaml_path=args.config)
        setup_logging(**config.logging.model_dump())

        now = to_datetime(args.now) if args.now else datetime.now(UTC).astimezone()
        if now is None:
            parser.error(f"Invalid --now value: {args.now}")

        reader = MarkdownVaultReader(args.vault)
        snapshot = VaultCollector().collect(reader.notes(), reader=reader.read, collected_at=now)
        report = ParaAnalyticsEngine(config).analyze(snapshot, now)
    except ParaLensError as e:
        sys.stderr.write(f"error: {e.message}\n")
        return 1

    print(report.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
