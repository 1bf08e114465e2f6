"""Storefront load testing: Locust entry point.

Usage:
    # Seed an administrator first (scenarios create their own catalogue):
    python src/manage.py seed --admin-email admin@example.com --admin-password change-me

    # All scenarios (web UI):
    locust -f loadtests/locustfile.py

    # Shopping traffic only, headless (CI mode):
    locust -f loadtests/locustfile.py BrowsingUser ShopperUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest

    # Stock contention:
    locust -f loadtests/locustfile.py LastUnitRaceUser

Rejected requests are tallied by error kind and printed when the run stops,
so expected rejections (``insufficient_stock`` while racing for stock) can be
told apart from real faults.
"""

import logging
import time
from collections import Counter

from locust import events

from loadtests.helpers.response import error_kind, extract_error_detail
from loadtests.scenarios.storefront import BrowsingUser, ShopperUser  # noqa: F401
from loadtests.scenarios.stress import LastUnitRaceUser  # noqa: F401

logger = logging.getLogger("loadtest")

rejections: Counter = Counter()


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
        return
    if response is None or response.status_code < 400:
        return

    rejections[error_kind(response)] += 1
    if response.status_code >= 500:
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, extract_error_detail(response))


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    rejections.clear()
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')} against {environment.host}\n")


@events.test_stop.add_listener
def on_test_stop(**_kwargs):
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    for kind, count in rejections.most_common():
        print(f"[LOADTEST]   {kind}: {count}")
