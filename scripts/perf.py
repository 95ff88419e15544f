"""In-process latency check for ``POST /v1/notion/sprint-name``.

Drives the FastAPI app through httpx's ASGI transport, so no socket or Notion
call is involved. Each case is run ``PERF_ITERS`` times after ``PERF_WARMUP``
untimed requests, and min/avg/p50/p95/max latencies are printed with the
status codes seen.

Usage:
    PERF_ITERS=500 PERF_WARMUP=50 python scripts/perf.py
"""

from __future__ import annotations

import asyncio
import math
import os
import sys
import time
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from sprintnamer.api import create_app
from sprintnamer.config import Settings
from sprintnamer.logging import configure_logging
from sprintnamer.service import SprintNamerService

TOKEN = "perf-token"
TOKEN_HEADER = "X-Notion-Automations-Token"
PATH = "/v1/notion/sprint-name"


@dataclass(frozen=True)
class Case:
    name: str
    headers: dict[str, str]
    body: dict[str, Any]
    expected_status: int


CASES = (
    Case("valid", {TOKEN_HEADER: TOKEN}, {"seed": "2026_W04"}, 200),
    Case("missing token", {}, {"seed": "2026_W04"}, 401),
    Case("invalid token", {TOKEN_HEADER: "not-the-token"}, {"seed": "2026_W04"}, 401),
    Case("missing seed", {TOKEN_HEADER: TOKEN}, {}, 400),
    Case("empty seed", {TOKEN_HEADER: TOKEN}, {"seed": ""}, 400),
)


@dataclass
class CaseResult:
    case: Case
    latencies_ms: list[float] = field(default_factory=list)
    statuses: Counter[int] = field(default_factory=Counter)

    @property
    def unexpected(self) -> int:
        return sum(n for status, n in self.statuses.items() if status != self.case.expected_status)


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """Nearest-rank percentile of an ascending sequence; 0 when empty."""
    if not sorted_values:
        return 0.0
    index = min(len(sorted_values) - 1, max(0, math.ceil(p / 100 * len(sorted_values)) - 1))
    return sorted_values[index]


def summarize(values_ms: Sequence[float]) -> dict[str, float]:
    ordered = sorted(values_ms)
    return {
        "n": len(ordered),
        "min": ordered[0] if ordered else 0.0,
        "avg": sum(ordered) / len(ordered) if ordered else 0.0,
        "p50": percentile(ordered, 50),
        "p95": percentile(ordered, 95),
        "max": ordered[-1] if ordered else 0.0,
    }


def build_service() -> SprintNamerService:
    settings = Settings(
        _env_file=None,
        env="test",
        api_auth_enabled=True,
        automations_token=TOKEN,
        notion_api_token="secret_perf",
    )
    return SprintNamerService.create(settings)


async def measure(
    iterations: int, warmup: int, cases: Sequence[Case] = CASES
) -> list[CaseResult]:
    """Time every case against a fresh app and return per-case results."""
    service = build_service()
    transport = httpx.ASGITransport(app=create_app(service=service))
    results = []
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://perf") as client:
            for case in cases:
                for _ in range(warmup):
                    await client.post(PATH, headers=case.headers, json=case.body)

                result = CaseResult(case)
                for _ in range(iterations):
                    start = time.perf_counter()
                    response = await client.post(PATH, headers=case.headers, json=case.body)
                    result.latencies_ms.append((time.perf_counter() - start) * 1000)
                    result.statuses[response.status_code] += 1
                results.append(result)
    finally:
        await service.close()
    return results


def format_result(result: CaseResult) -> str:
    stats = summarize(result.latencies_ms)
    statuses = ", ".join(f"{status}={n}" for status, n in sorted(result.statuses.items()))
    return (
        f"{result.case.name:<14} n={stats['n']:<5} min={stats['min']:.3f} "
        f"avg={stats['avg']:.3f} p50={stats['p50']:.3f} p95={stats['p95']:.3f} "
        f"max={stats['max']:.3f} ms  status {statuses} (expected {result.case.expected_status})"
    )


def main() -> int:
    iterations = int(os.environ.get("PERF_ITERS", "200"))
    warmup = int(os.environ.get("PERF_WARMUP", "25"))

    # Per-request access logs would dominate the output
    configure_logging(level="ERROR")

    results = asyncio.run(measure(iterations, warmup))
    for result in results:
        print(format_result(result))

    return 1 if any(result.unexpected for result in results) else 0


if __name__ == "__main__":
    sys.exit(main())
