#!/usr/bin/env python3
"""Poll a Bifrost bridge and print the derived entity view.

Runs the same read path a dashboard uses: the polling synchronizer feeds
snapshots into the filter/sort view model, and each new snapshot is
printed as a table (or JSON).

Usage
-----
::

    export BIFROST_URL="http://bifrost.local"
    python scripts/watch_bridge.py --tab lights --query kitchen

Options::

    --url URL            Bridge base URL (default: $BIFROST_URL)
    --once               Fetch one snapshot and exit
    --json               Output machine-readable JSON
    --output FILE        Write JSON to FILE instead of stdout (with --once)
    --tab TAB            lights | switches | sensors | hidden | all
    --query TEXT         Free-text filter
    --background         Poll at the background (hidden tab) interval
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pybifrost import (  # noqa: E402
    BifrostClient,
    BifrostConfig,
    EntityTab,
    PollingSynchronizer,
    Snapshot,
    derive_view,
    tab_counters,
)

# ── helpers ──────────────────────────────────────────────────


def _section(title: str) -> str:
    line = "=" * 60
    return f"\n{line}\n  {title}\n{line}"


def _render_text(snapshot: Snapshot, tab: EntityTab, query: str, error: str | None) -> str:
    out: list[str] = []
    stamp = snapshot.fetched_at.isoformat() if snapshot.fetched_at else "-"
    out.append(_section(f"snapshot v{snapshot.version}  {stamp}"))
    if error:
        out.append(f"  !! {error}")

    if snapshot.bridge is not None:
        for label, value in snapshot.bridge.summary_rows():
            out.append(f"  {label:<12}: {value}")
    if snapshot.runtime is not None:
        runtime = snapshot.runtime
        out.append(f"  {'HA runtime':<12}: enabled={runtime.enabled} url={runtime.url or '-'} token={runtime.token_present}")

    counters = tab_counters(snapshot.entities)
    out.append("  " + "  ".join(f"{name}={count}" for name, count in counters.items()))

    rows = derive_view(snapshot.entities, tab.predicate, query)
    out.append(f"\n  ── {tab.value} ({len(rows)} shown) ──")
    for entity in rows:
        flag = "ADDED " if entity.included else "HIDDEN"
        state = entity.state if entity.available else "unavailable"
        out.append(
            f"  {flag} {entity.room_name or '-':<18} {entity.name:<28} {entity.entity_id:<36} {state}"
        )
    return "\n".join(out)


def _render_json(snapshot: Snapshot, tab: EntityTab, query: str, error: str | None) -> dict[str, Any]:
    rows = derive_view(snapshot.entities, tab.predicate, query)
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "version": snapshot.version,
        "error": error,
        "bridge": snapshot.bridge.model_dump(mode="json") if snapshot.bridge else None,
        "runtime": snapshot.runtime.model_dump(mode="json") if snapshot.runtime else None,
        "counters": {str(name): count for name, count in tab_counters(snapshot.entities).items()},
        "entities": [entity.model_dump(mode="json") for entity in rows],
    }


# ── main ─────────────────────────────────────────────────────


async def main() -> None:
    parser = argparse.ArgumentParser(
        description="Watch a Bifrost bridge and print the entity list.",
    )
    parser.add_argument("--url", help="Bridge base URL (default: $BIFROST_URL)")
    parser.add_argument("--once", action="store_true", help="Fetch one snapshot and exit")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--output", "-o", help="Write JSON to FILE instead of stdout (with --once)")
    parser.add_argument("--tab", choices=[tab.value for tab in EntityTab], default=EntityTab.ALL.value)
    parser.add_argument("--query", default="", help="Free-text filter")
    parser.add_argument("--background", action="store_true", help="Poll at the background interval")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.url:
        overrides["base_url"] = args.url
    config = BifrostConfig.from_env(**overrides)
    tab = EntityTab(args.tab)

    async with BifrostClient(config) as client:
        sync_holder: list[PollingSynchronizer] = []

        def emit(snapshot: Snapshot) -> None:
            error = sync_holder[0].error if sync_holder else None
            if args.json_mode:
                print(json.dumps(_render_json(snapshot, tab, args.query, error), indent=2, ensure_ascii=False))
            else:
                print(_render_text(snapshot, tab, args.query, error))

        def report_error(message: str | None) -> None:
            if message and not args.json_mode:
                print(f"  !! poll failed: {message}", file=sys.stderr)

        synchronizer = PollingSynchronizer(
            client,
            config,
            on_snapshot=None if args.once else emit,
            on_error=report_error,
        )
        sync_holder.append(synchronizer)
        synchronizer.set_visible(not args.background)

        if args.once:
            await synchronizer.refresh_now()
            snapshot = synchronizer.snapshot
            if args.json_mode:
                payload = json.dumps(
                    _render_json(snapshot, tab, args.query, synchronizer.error), indent=2, ensure_ascii=False
                )
                if args.output:
                    Path(args.output).write_text(payload, encoding="utf-8")
                    print(f"JSON written to {args.output}", file=sys.stderr)
                else:
                    print(payload)
            else:
                print(_render_text(snapshot, tab, args.query, synchronizer.error))
            return

        async with synchronizer:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                pass


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
