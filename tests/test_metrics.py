"""Tests pour les métriques Prometheus.

Ce module teste que les métriques HTTP et de génération sont exposées via l'endpoint /metrics, et
que les routes sont étiquetées par gabarit.
"""

from backend.core.http_constants import HTTP_OK
from backend.domain.quota import DEFAULT_POINTS


def test_metrics_exposed(client):
    """Teste que l'endpoint /metrics expose les métriques Prometheus."""
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert b"http_requests_total" in r.content
    assert b"ai_generation_requests_total" in r.content
    assert b"ai_quota_rejections_total" in r.content
    assert b"ai_category_patch_total" in r.content


def test_generation_metrics_after_requests(client, auth_headers):
    """Teste les compteurs après générations réussies et refus de quota."""
    headers = auth_headers("metrics-user")
    for _ in range(DEFAULT_POINTS + 1):
        client.post("/ai/generate", json={"title": "Mouse"}, headers=headers)

    text = client.get("/metrics").text
    assert 'ai_generation_requests_total{mode="scratch",language="en"}' in text
    assert "ai_generation_latency_seconds_bucket" in text


def test_route_label_uses_template(client, auth_headers):
    """Teste que l'identifiant de produit n'apparaît pas dans les labels."""
    client.post("/ai/generate/some-product-id", headers=auth_headers())

    text = client.get("/metrics").text
    assert 'route="/ai/generate/{product_id}"' in text
    assert "some-product-id" not in text
