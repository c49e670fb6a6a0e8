"""Endpoints whose payload is what a monitor inspects.

Keyword and HTML monitors look for text in the body; the degraded and
certificate endpoints return plausible numbers that change per call.
"""

import random
from datetime import timedelta

from mocktarget.endpoints._registry import Endpoint, isoformat
from mocktarget.state import Clock
from mocktarget.templating import Template

KEYWORDS = ("OPERATIONAL", "ALL_SYSTEMS_GO", "STATUS_OK")
HTML_DOWN_RATE = 0.1
CERT_MAX_DAYS = 90
CERT_WARNING_DAYS = 7
CERT_ISSUED_DAYS_AGO = 30


def degraded(rng: random.Random, clock: Clock):
    return {
        "status": "degraded",
        "message": "Service is running but performance is degraded",
        "metrics": {
            "responseTime": round(500 + rng.random() * 1000),
            "cpuUsage": round(70 + rng.random() * 25),
            "memoryUsage": round(80 + rng.random() * 15),
        },
        "timestamp": isoformat(clock.now()),
    }


def keyword_check(rng: random.Random, clock: Clock):
    return {
        "status": "OPERATIONAL",
        "keyword": KEYWORDS[int(rng.random() * len(KEYWORDS))],
        "message": "Use keyword monitoring to check for 'OPERATIONAL'",
        "timestamp": isoformat(clock.now()),
    }


def html_status(rng: random.Random, clock: Clock) -> Template:
    is_up = rng.random() > HTML_DOWN_RATE
    return Template(
        "html_status.html",
        title="Mock Server",
        css_class="up" if is_up else "down",
        marker="UP" if is_up else "DOWN",
        label="Operational" if is_up else "Outage",
        updated=isoformat(clock.now()),
    )


def cert_check(rng: random.Random, clock: Clock):
    now = clock.now()
    days = int(rng.random() * CERT_MAX_DAYS)
    return {
        "status": "warning" if days < CERT_WARNING_DAYS else "ok",
        "certificate": {
            "subject": "*.example.com",
            "issuer": "Let's Encrypt",
            "validFrom": isoformat(now - timedelta(days=CERT_ISSUED_DAYS_AGO)),
            "validUntil": isoformat(now + timedelta(days=days)),
            "daysUntilExpiry": days,
        },
        "timestamp": isoformat(now),
    }


ENDPOINTS: tuple[Endpoint, ...] = (
    Endpoint("/degraded", degraded, "Returns 200 with degraded status"),
    Endpoint("/keyword-check", keyword_check, "JSON with monitorable keywords"),
    Endpoint("/html-status", html_status, "HTML page with status"),
    Endpoint("/cert-check", cert_check, "Certificate expiry simulation"),
)
