#!/usr/bin/env python3
"""
alicloud_admission/cli/validate.py

Validates Alicloud-related Gardener manifests read from YAML files, the same
way the admission webhook would.

Usage example:
  python -m alicloud_admission.cli.validate shoot --new shoot.yaml
  python -m alicloud_admission.cli.validate seed --new seed.yaml --old seed-old.yaml

Settings (dual-stack regions, NAT gateway zones, log level) are read from
ALICLOUD_ADMISSION_* environment variables.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, List, NoReturn, Optional

import yaml

from alicloud_admission.admission import validators_by_kind
from alicloud_admission.models.settings import AdmissionSettings

logger = logging.getLogger(__name__)

KINDS = ("shoot", "cloudprofile", "seed", "backupbucket", "secret")


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    Entry point; exits 0 if the object is accepted, 1 otherwise.
    """
    parser = argparse.ArgumentParser(
        prog="alicloud-admission",
        description="Validate Alicloud provider manifests before they are applied.",
    )
    subparsers = parser.add_subparsers(dest="kind", required=True)

    for kind in KINDS:
        kind_parser = subparsers.add_parser(kind, help=f"Validate a {kind} manifest.")
        kind_parser.add_argument(
            "--new",
            required=True,
            help="Path to the YAML manifest to validate.",
        )
        kind_parser.add_argument(
            "--old",
            default=None,
            help="Path to the currently stored manifest; enables update checks.",
        )

    args = parser.parse_args(argv)

    settings = AdmissionSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        _run(args, settings)
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    else:
        print(f"{args.kind} {args.new} is valid")
        sys.exit(0)


def _run(args: argparse.Namespace, settings: AdmissionSettings) -> None:
    validator = validators_by_kind(settings)[args.kind]
    new_obj = _load_yaml(args.new)
    old_obj = _load_yaml(args.old) if args.old else None
    logger.debug("Validating %s from %s (old: %s)", args.kind, args.new, args.old)
    validator.validate(new_obj, old_obj)


def _load_yaml(path: str) -> Any:
    """
    Load a single YAML document.

    Raises:
        ValueError: If the file is missing or empty.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ValueError(f"manifest not found: {path}") from exc
    if data is None:
        raise ValueError(f"manifest is empty: {path}")
    return data


if __name__ == "__main__":
    main()
