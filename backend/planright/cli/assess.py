"""CLI for assessing proposal JSON files against the exempt development rules."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from planright.data.sample_properties import find_sample_property
from planright.engine.assessment import run_rules_assessment
from planright.engine.invariants import EngineInvariantError, assert_proposal_valid
from planright.engine.types import RuleResult
from planright.engine.validation import build_proposal

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_proposal(path: Path, sample_id: Optional[str] = None) -> Any:
    """Read a proposal from ``path``, optionally placing it on a sample lot."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if sample_id and isinstance(data, dict):
        sample = find_sample_property(sample_id)
        if sample is None:
            raise ValueError(f"Unknown sample property: {sample_id}")
        data = {
            **data,
            "property": sample.to_property_section(),
            "context": {**(data.get("context") or {}), **sample.to_context_section()},
        }
    return data


def format_text(source: str, result: RuleResult) -> str:
    lines = [f"{source}: {result.decision.value}"]
    for error in result.errors:
        lines.append(f"  ! {error.field}: {error.message}")
    for check in result.failed_checks:
        marker = "KILLER" if check.killer else "fail"
        lines.append(f"  - {check.rule_id} [{check.citation}] {marker}: {check.note}")
    return "\n".join(lines)


def assess_file(path: Path, strict: bool = False, text: bool = False, sample_id: Optional[str] = None) -> bool:
    """Assess one file and print the result. Returns False if it could not be assessed."""
    try:
        raw = load_proposal(path, sample_id)
    except (OSError, ValueError) as e:
        logger.error(f"{path}: could not read proposal: {e}")
        return False

    if strict:
        built, errors = build_proposal(raw)
        if built is None:
            logger.error(f"{path}: {errors[0].field}: {errors[0].message}")
            return False
        try:
            assert_proposal_valid(built)
        except EngineInvariantError as e:
            logger.error(f"{path}: {e.rule_id} [{e.citation}] {e.message}")
            return False

    result = run_rules_assessment(raw)
    if text:
        print(format_text(str(path), result))
    else:
        print(json.dumps({"source": str(path), **result.to_dict()}, indent=2, ensure_ascii=False))
    return True


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Assess proposed sheds, patios and carports for exempt development",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  planright-assess proposal.json
  planright-assess --text shed.json carport.json
  planright-assess --sample ALB-004 shed.json
  planright-assess --strict proposal.json
        """,
    )

    parser.add_argument(
        "proposals",
        nargs="+",
        help="Proposal JSON files to assess",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop at the first invalid field instead of reporting 'Cannot assess'",
    )

    parser.add_argument(
        "--text",
        action="store_true",
        help="Print a short verdict instead of JSON",
    )

    parser.add_argument(
        "--sample",
        "-s",
        help="Assess on a sample property (e.g. ALB-001) instead of the file's property",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    failures = 0
    for name in args.proposals:
        path = Path(name)
        if not path.exists():
            logger.error(f"File not found: {name}")
            failures += 1
            continue
        if not assess_file(path, strict=args.strict, text=args.text, sample_id=args.sample):
            failures += 1

    if failures:
        logger.warning(f"{failures} of {len(args.proposals)} proposal(s) could not be assessed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
