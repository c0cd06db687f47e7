#!/usr/bin/env python3
"""Live API verification script — run with network access.

Usage:
  python scripts/verify_api.py

Steps:
  Step 1: Show configuration
  Step 2: Exact name lookup (France)
  Step 3: Fuzzy name lookup (germ → exact fails, fuzzy succeeds)
  Step 4: Border codes lookup (FRA, DEU)
  Step 5: Region name list (europe)
  Step 6: Full controller lookup rendered to the console
"""

import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def step_header(n: int, title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  Step {n}: {title}")
    print(f"{'='*60}\n")


def ok(msg: str) -> None:
    print(f"  ✅ {msg}")


def fail(msg: str) -> None:
    print(f"  ❌ {msg}")


def info(msg: str) -> None:
    print(f"  ℹ️  {msg}")


async def step1_show_config():
    step_header(1, "Configuration")
    from countrylens.config import settings

    ok(f"API base URL: {settings.api_base_url}")
    ok(f"Cache TTL: {settings.cache_ttl_seconds}s | prefix={settings.cache_key_prefix}")
    ok(f"Retries: {settings.fetch_max_retries} | backoff base={settings.backoff_base_seconds}s")
    if settings.has_redis:
        ok(f"Redis: {settings.redis_url}")
    else:
        info("REDIS_URL: not set (in-memory cache)")
    return True


async def step2_exact_name():
    step_header(2, "Exact name lookup")
    from countrylens.integrations.rest_countries import RestCountriesClient

    client = RestCountriesClient()
    info("Looking up: 'France' (fullText=true)")
    results = await client.by_exact_name("France")

    if results:
        ok(f"Got {len(results)} record(s): {results[0]['name']['common']}")
        return True
    fail("No results returned — check network connectivity")
    return False


async def step3_fuzzy_name():
    step_header(3, "Fuzzy name lookup")
    from countrylens.integrations.rest_countries import RestCountriesClient
    from countrylens.services.cache import ExpiringCache
    from countrylens.services.repository import CountryRepository

    repository = CountryRepository(RestCountriesClient(), ExpiringCache())
    info("Resolving: 'germ' (exact should fail, fuzzy should match)")
    record = await repository.resolve_by_name("germ")

    if record:
        ok(f"Resolved to {record.common_name} ({record.cca3})")
        return True
    fail("Fuzzy lookup returned nothing")
    return False


async def step4_codes():
    step_header(4, "Border codes lookup")
    from countrylens.integrations.rest_countries import RestCountriesClient

    client = RestCountriesClient()
    info("Looking up codes: FRA, DEU")
    results = await client.by_codes(["FRA", "DEU"])

    if len(results) == 2:
        ok("Got: " + ", ".join(r["name"]["common"] for r in results))
        return True
    fail(f"Expected 2 records, got {len(results)}")
    return False


async def step5_region():
    step_header(5, "Region name list")
    from countrylens.integrations.rest_countries import RestCountriesClient

    client = RestCountriesClient()
    info("Listing region: europe")
    try:
        names = await client.list_names_by_region("europe")
    except Exception as e:
        fail(f"Region listing failed: {e}")
        return False

    ok(f"Got {len(names)} names, e.g. {', '.join(names[:3])}")
    return True


async def step6_controller():
    step_header(6, "Full lookup through the controller")
    from countrylens.orchestrator.controller import build_controller
    from countrylens.services.cache import ExpiringCache
    from countrylens.views.console import ConsoleRenderer

    errors = []

    class TrackingRenderer(ConsoleRenderer):
        def render_error(self, message: str) -> None:
            errors.append(message)
            super().render_error(message)

    controller = build_controller(TrackingRenderer(), cache=ExpiringCache())
    await controller.lookup_by_name("france")

    if errors:
        fail(f"Lookup rendered an error: {errors[0]}")
        return False
    ok("Lookup rendered without errors")
    return True


async def main():
    print("\n🌍 CountryLens — Live API Verification")
    print("=" * 60)

    results = {}
    results[1] = await step1_show_config()
    results[2] = await step2_exact_name()
    results[3] = await step3_fuzzy_name()
    results[4] = await step4_codes()
    results[5] = await step5_region()
    results[6] = await step6_controller()

    # Summary
    print(f"\n{'='*60}")
    print("  SUMMARY")
    print(f"{'='*60}")
    for step_n, passed in sorted(results.items()):
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"  Step {step_n}: {status}")

    total_passed = sum(1 for v in results.values() if v)
    total = len(results)
    print(f"\n  {total_passed}/{total} steps passed")
    print(f"{'='*60}\n")

    sys.exit(0 if all(results.values()) else 1)


if __name__ == "__main__":
    asyncio.run(main())
