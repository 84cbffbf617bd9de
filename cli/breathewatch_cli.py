"""CLI client for the BreatheWatch API: scores or compares neighborhoods and prints a terminal report.

Usage:
    python cli/breathewatch_cli.py score "Central Harlem"
    python cli/breathewatch_cli.py compare "Central Harlem" "Astoria" "Park Slope"
"""

import argparse
import asyncio
import sys

import httpx

RISK_MARKERS = {"Safe": "+", "Moderate": "~", "High": "!"}


# ── Helpers ──────────────────────────────────────────────────────────────────

def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _marker(risk: str | None) -> str:
    return RISK_MARKERS.get(risk or "", "?")


# ── Report sections ──────────────────────────────────────────────────────────

def print_score(data: dict) -> None:
    _header(f"Air Quality: {data['neighborhood']}, {data['borough']} ({data['year']})")
    print(f"  PM2.5:            {data['pm25']} ug/m3")
    print(f"  NO2:              {data['no2']} ppb")
    if data.get("ozone") is not None:
        print(f"  Ozone:            {float(data['ozone']):.2f} ppb")
    print(f"  Overall Risk:     [{_marker(data['overall_risk'])}] {data['overall_risk']}")


def print_comparison(data: dict) -> None:
    _header("Neighborhood Comparison")
    print(f"  {'':3}{'Neighborhood':<32} {'Borough':<14} {'PM2.5':>7} {'NO2':>7}  Risk")
    print(f"  {'':3}{'-' * 32} {'-' * 14} {'-' * 7} {'-' * 7}  {'-' * 8}")
    for r in data["results"]:
        if not r["success"]:
            continue
        print(
            f"  [{_marker(r['overallRisk'])}]{r['neighborhood']:<32} {r['borough']:<14} "
            f"{r['pm25Value']:>7} {r['no2Value']:>7}  {r['overallRisk']}"
        )

    failed = [r for r in data["results"] if not r["success"]]
    if failed:
        print()
        print("  Not compared:")
        for r in failed:
            print(f"    {r['inputName']}: {r['error']}")


# ── Main ─────────────────────────────────────────────────────────────────────

async def _request(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> dict:
    try:
        resp = await client.request(method, url, **kwargs)
    except httpx.ConnectError:
        print(f"Error: Could not connect to API at {url}", file=sys.stderr)
        print("Is the server running? Start with: uvicorn breathewatch.api.app:app --reload", file=sys.stderr)
        sys.exit(1)
    except httpx.TimeoutException:
        print("Error: Request timed out", file=sys.stderr)
        sys.exit(1)

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        try:
            detail = resp.json().get("detail", resp.text)
        except ValueError:
            detail = resp.text
        print(f"  {detail}", file=sys.stderr)
        sys.exit(1)

    return resp.json()


async def main() -> None:
    parser = argparse.ArgumentParser(description="Look up NYC neighborhood air quality via the BreatheWatch API")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="Score one neighborhood")
    score.add_argument("neighborhood")

    compare = sub.add_parser("compare", help="Compare two or more neighborhoods")
    compare.add_argument("neighborhoods", nargs="+")

    args = parser.parse_args()
    if args.command == "compare" and len(args.neighborhoods) < 2:
        parser.error("compare needs at least two neighborhoods")

    async with httpx.AsyncClient(timeout=30) as client:
        if args.command == "score":
            data = await _request(
                client, "GET", f"{args.api_url}/api/v1/air-quality/score",
                params={"neighborhood": args.neighborhood},
            )
            print_score(data)
        else:
            data = await _request(
                client, "POST", f"{args.api_url}/api/v1/comparison",
                json={"neighborhoods": args.neighborhoods},
            )
            print_comparison(data)
    print()


if __name__ == "__main__":
    asyncio.run(main())
