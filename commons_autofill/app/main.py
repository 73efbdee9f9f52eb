import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from commons_autofill.app.application.favorites import patch_favorites_from_entries
from commons_autofill.app.composition import create_resolver_dependencies
from commons_autofill.app.config.settings import Settings
from commons_autofill.app.constants import SERVICE_NAME
from commons_autofill.app.domain.models import BandRequest, CacheEntry
from commons_autofill.app.presentation.credits import render_credit_list


def _log(event: str, **kwargs) -> None:
    logger.bind(service_name=SERVICE_NAME, event=event, **kwargs).info("")


def parse_band(value: str) -> BandRequest:
    """``"Queen:1970"`` -> BandRequest("Queen", 1970); the year part is optional."""
    name, sep, year = value.rpartition(":")
    if sep and year.strip().isdigit() and name.strip():
        return BandRequest(name=name.strip(), year=int(year.strip()))
    return BandRequest(name=value.strip())


def load_bands(path: Path) -> list[BandRequest]:
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        raise ValueError(f"{path} must contain a JSON list of {{name, year}} objects")
    bands = []
    for row in rows:
        if isinstance(row, str):
            bands.append(BandRequest(name=row))
        elif isinstance(row, dict) and isinstance(row.get("name"), str):
            year = row.get("year")
            bands.append(BandRequest(name=row["name"], year=year if isinstance(year, int) else None))
    return bands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commons-autofill",
        description="Resolve Wikimedia Commons images and attribution for bands",
    )
    parser.add_argument("--band", action="append", default=[], metavar="NAME[:YEAR]")
    parser.add_argument("--input", type=Path, help="JSON list of {name, year} objects")
    parser.add_argument("--concurrency", type=int, default=None)
    parser.add_argument("--clear-cache", action="store_true")
    parser.add_argument("--html", type=Path, help="write the rendered credit list here")
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="record a failed band as empty instead of aborting the batch",
    )
    return parser


def _summary(band: BandRequest, entry: CacheEntry | None) -> dict[str, Any]:
    if entry is None:
        return {"name": band.name, "year": band.year, "status": "error"}
    if entry.missing:
        return {"name": entry.name, "year": entry.year, "status": "missing", "file_name": entry.file_name}
    return {
        "name": entry.name,
        "year": entry.year,
        "status": "resolved",
        "image_url": entry.image_url,
        "credit": entry.credit,
        "license": entry.license_name,
    }


async def run(args: argparse.Namespace, settings: Settings) -> int:
    bands = [parse_band(value) for value in args.band]
    if args.input is not None:
        bands.extend(load_bands(args.input))

    deps = create_resolver_dependencies(settings)
    if args.clear_cache:
        deps.cache.clear()
        _log("cache_cleared")

    if not bands:
        return 0

    await deps.connect()
    try:
        limit = args.concurrency or settings.batch_concurrency

        def on_progress(completed: int, total: int) -> None:
            _log("batch_progress", completed=completed, total=total)

        _log("batch_started", total=len(bands), concurrency=limit)
        entries = await deps.resolver.resolve_many(
            bands,
            limit=limit,
            on_progress=on_progress,
            abort_on_error=settings.abort_batch_on_error and not args.continue_on_error,
        )
    finally:
        await deps.close()

    patched = patch_favorites_from_entries(deps.favorites, entries)
    _log("favorites_patched", count=patched)

    if args.html is not None:
        args.html.parent.mkdir(parents=True, exist_ok=True)
        args.html.write_text(render_credit_list(bands, entries), encoding="utf-8")
        _log("credits_written", path=str(args.html))

    print(json.dumps([_summary(b, e) for b, e in zip(bands, entries)], ensure_ascii=False, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(run(args, Settings()))
    except KeyboardInterrupt:
        _log("resolver_interrupted")
        return 130
    except Exception as e:
        logger.exception("batch failed: {}", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
