#!/usr/bin/env python3
"""
Chaos smoke check against a running pool instance.

Walks the failover scenario end to end:
  healthz -> chaos/start -> version (expect 500) -> healthz (still 200)
  -> chaos/stop -> version (expect 200)

Run this after starting the service with: bluegreen-service

Usage:
    python scripts/chaos_smoke.py
    python scripts/chaos_smoke.py --base-url http://127.0.0.1:8081
"""

import argparse
import asyncio
import sys

import httpx

DEFAULT_BASE_URL = "http://127.0.0.1:3000"


def identity_of(resp: httpx.Response) -> str:
    return f"pool={resp.headers.get('X-App-Pool')} release={resp.headers.get('X-Release-Id')}"


async def check_health(client: httpx.AsyncClient) -> bool:
    """Check that the instance is up."""
    try:
        resp = await client.get("/healthz", timeout=5.0)
    except httpx.HTTPError as e:
        print(f"✗ Service not reachable: {e}")
        return False
    if resp.status_code != 200:
        print(f"✗ Health check failed: {resp.status_code}")
        return False
    print(f"✓ Healthy ({identity_of(resp)})")
    return True


async def expect_version(client: httpx.AsyncClient, status: int) -> bool:
    """GET /version and compare the status code."""
    resp = await client.get("/version", timeout=5.0)
    if resp.status_code != status:
        print(f"✗ /version returned {resp.status_code}, expected {status}")
        return False
    print(f"✓ /version -> {status} ({identity_of(resp)})")
    return True


async def start_chaos(client: httpx.AsyncClient) -> bool:
    resp = await client.post("/chaos/start", params={"mode": "error"}, timeout=5.0)
    if resp.status_code != 200 or resp.json().get("mode") != "error":
        print(f"✗ Chaos start failed: {resp.status_code} {resp.text}")
        return False
    print("✓ Chaos mode enabled (error)")
    return True


async def stop_chaos(client: httpx.AsyncClient) -> bool:
    resp = await client.post("/chaos/stop", timeout=5.0)
    if resp.status_code != 200:
        print(f"✗ Chaos stop failed: {resp.status_code} {resp.text}")
        return False
    print(f"✓ Chaos mode disabled (wasEnabled={resp.json().get('wasEnabled')})")
    return True


async def run(base_url: str) -> bool:
    async with httpx.AsyncClient(base_url=base_url) as client:
        if not await check_health(client):
            return False

        steps_ok = await start_chaos(client)
        try:
            steps_ok = steps_ok and await expect_version(client, 500)
            steps_ok = steps_ok and await check_health(client)
        finally:
            # Always leave the pool healthy
            steps_ok = await stop_chaos(client) and steps_ok

        return steps_ok and await expect_version(client, 200)


def main() -> int:
    parser = argparse.ArgumentParser(description="Chaos mode smoke check")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Service base URL")
    args = parser.parse_args()

    print("=" * 60)
    print(f"Chaos smoke check: {args.base_url}")
    print("=" * 60)

    ok = asyncio.run(run(args.base_url))
    print("PASS" if ok else "FAIL")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
