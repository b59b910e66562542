"""Lightweight REST client for the teambuilder API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def load_items(path: Path) -> list[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid cards JSON: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("items", [])
    if not isinstance(payload, list):
        raise SystemExit("cards file must hold a list or an object with an 'items' list")
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the teambuilder REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("cards", type=Path, nargs="?", help="Cards JSON file")
    parser.add_argument("--metric", default="meta_ovr", help="Scoring metric")
    parser.add_argument("--list-metrics", action="store_true", help="List supported metrics and exit")
    parser.add_argument("--export-path", type=Path, help="Download the roster as CSV to this path")
    parser.add_argument(
        "--candidates",
        choices=["lineup", "bench", "rotation", "bullpen"],
        help="List replacement candidates for one roster slot",
    )
    parser.add_argument("--index", type=int, default=0, help="Slot index for --candidates (0-based)")
    parser.add_argument("--bench-role", help="Bench role for --candidates bench")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_metrics:
            resp = client.get("/team-builder/metrics")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.cards is None:
            raise SystemExit("cards file is required unless using --list-metrics")
        body = {"items": load_items(args.cards)}

        if args.export_path:
            resp = client.post("/team-builder/export.csv", params={"metric": args.metric}, json=body)
            resp.raise_for_status()
            args.export_path.write_text(resp.text)
            print(f"CSV export saved to {args.export_path}")
            return

        if args.candidates:
            params = {"metric": args.metric, "kind": args.candidates, "index": args.index}
            if args.bench_role:
                params["bench_role"] = args.bench_role
            resp = client.post("/team-builder/replacements", params=params, json=body)
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail", "bad request"))
            resp.raise_for_status()
            payload = resp.json()
            for idx, card in enumerate(payload["candidates"][:10], start=1):
                marker = " (recommended)" if idx == 1 else ""
                print(f"{idx}. {card.get('name') or card['id']}{marker}")
            return

        resp = client.post("/team-builder", params={"metric": args.metric}, json=body)
        if resp.status_code == 400:
            raise SystemExit(resp.json().get("detail", "bad request"))
        resp.raise_for_status()
        payload = resp.json()
        for slot in payload["lineup"]:
            card = slot["card"]
            print(f"{slot['slot']}. {slot['position']:<3} {card.get('name') or card['id']}")
        closer = next((slot for slot in payload["bullpen"] if slot.get("role")), None)
        if closer:
            print(f"Closer: {closer['card'].get('name') or closer['card']['id']}")


if __name__ == "__main__":
    main()
