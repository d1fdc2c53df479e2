import json
import logging
from decimal import Decimal

import pytest
from config.logging import JsonFormatter, SamplingFilter
from rest_framework.test import APIClient


def _record(msg="order.created", level=logging.INFO, **extra):
    record = logging.LogRecord("lumiere.orders", level, __file__, 1, msg, None, None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_merges_extra_fields():
    line = JsonFormatter().format(_record(event="order.created", order_id=7, total_price=Decimal("12.50")))

    payload = json.loads(line)
    assert payload["message"] == "order.created"
    assert payload["name"] == "lumiere.orders"
    assert payload["order_id"] == 7
    assert payload["total_price"] == "12.50"
    assert payload["time"].endswith("Z")


def test_sampling_filter_never_drops_allowed_events_or_other_levels():
    sampler = SamplingFilter(rate=0.0, levels=["INFO"], allow_events=["order.status_changed"])

    assert sampler.filter(_record("order.status_changed")) is True
    assert sampler.filter(_record("order.created")) is False
    assert sampler.filter(_record("order.email_failed", level=logging.WARNING)) is True


@pytest.mark.django_db
def test_health_endpoint():
    resp = APIClient().get("/health/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
