import json

import httpx

from core.models import Resolution, AggregateVote, DetectionOutcome
from services.detector import main as cli


def use_transport(monkeypatch, body):
    """Route every classifier request of the CLI to a canned JSON body"""
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    original_init = cli.DetectionApiClient.__init__

    def patched_init(self, *args, **kwargs):
        kwargs["transport"] = transport
        original_init(self, *args, **kwargs)

    monkeypatch.setattr(cli.DetectionApiClient, "__init__", patched_init)


def test_format_nothing_detected():
    outcome = DetectionOutcome(resolution=Resolution.nothing_detected(), responses_ok=1, responses_failed=2)
    text = cli.format_outcome(outcome)
    assert "1/3" in text
    assert "No items detected" in text


def test_format_unknown_food():
    vote = AggregateVote(label="biryani", total_count=2, max_confidence=0.8, max_model_count=1)
    outcome = DetectionOutcome(resolution=Resolution.from_vote(vote, [vote]))
    assert "Please add manually" in cli.format_outcome(outcome)


def test_format_known_food(idli):
    vote = AggregateVote(label="idli", total_count=4, max_confidence=0.9, max_model_count=3)
    outcome = DetectionOutcome(resolution=Resolution.from_vote(vote, [vote]), food=idli,
                               suggested_quantity=3, suggested_grams=120)
    assert "3 pieces (120 g)" in cli.format_outcome(outcome)


def test_missing_image_exit_code(tmp_path, monkeypatch):
    monkeypatch.setattr(cli.settings, "log_file_path", None)
    monkeypatch.setattr(cli.settings, "enable_metrics", False)
    assert cli.main([str(tmp_path / "nope.jpg"), "--log-level", "ERROR"]) == 2


def test_main_prints_json(tmp_path, monkeypatch, capsys):
    image = tmp_path / "meal.jpg"
    image.write_bytes(b"img")
    catalog_path = tmp_path / "food.json"
    catalog_path.write_text(json.dumps([{"name": "idli", "unit": "piece", "default_weight_g": 40}]))

    use_transport(monkeypatch, {"predictions": [{"class": "idli", "confidence": 0.9}]})
    monkeypatch.setattr(cli.settings, "log_file_path", None)
    monkeypatch.setattr(cli.settings, "enable_metrics", False)

    code = cli.main([str(image), "--catalog", str(catalog_path), "--json", "--log-level", "ERROR"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["resolution"]["label"] == "idli"
    assert payload["suggested_quantity"] == 1


def test_metrics_port_follows_settings(monkeypatch):
    monkeypatch.setattr(cli.settings, "enable_metrics", True)
    monkeypatch.setattr(cli.settings, "prometheus_port", 9123)
    assert cli.build_parser().parse_args(["meal.jpg"]).metrics_port == 9123

    monkeypatch.setattr(cli.settings, "enable_metrics", False)
    assert cli.build_parser().parse_args(["meal.jpg"]).metrics_port is None
    assert cli.build_parser().parse_args(["meal.jpg", "--metrics-port", "9200"]).metrics_port == 9200


def test_metrics_exporter_started_only_when_port_set(tmp_path, monkeypatch):
    image = tmp_path / "meal.jpg"
    image.write_bytes(b"img")
    started = []
    monkeypatch.setattr(cli, "setup_prometheus_metrics", lambda name, port: started.append((name, port)))
    monkeypatch.setattr(cli.settings, "log_file_path", None)
    use_transport(monkeypatch, {"predictions": []})

    cli.main([str(image), "--log-level", "ERROR", "--metrics-port", "0"])
    cli.main([str(image), "--log-level", "ERROR", "--metrics-port", "9124"])

    assert started == [(cli.SERVICE_NAME, 9124)]
