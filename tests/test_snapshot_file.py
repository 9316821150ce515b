import json

import pytest

from pricefeed.schemas.price import PriceSnapshot
from pricefeed.storage.snapshot_file import (
    SnapshotFileMissing,
    SnapshotParseError,
    read_snapshot,
    write_snapshot,
)


def build_snapshot(**overrides) -> PriceSnapshot:
    values = {
        "chain_type": "sui",
        "price_usd": 0.56789,
        "price_native": 0.001234,
        "market_cap": 1234567.89,
        "fdv": 9876543.21,
        "last_updated": "2026-01-20T10:00:00+00:00",
    }
    values.update(overrides)
    return PriceSnapshot(**values)


def test_snapshot_file_roundtrip(tmp_path) -> None:
    path = tmp_path / "prices.json"
    snapshot = build_snapshot()

    write_snapshot(path, snapshot)
    loaded = read_snapshot(path)

    assert loaded == snapshot


def test_write_is_pretty_printed_and_leaves_no_temp_files(tmp_path) -> None:
    path = tmp_path / "prices.json"

    write_snapshot(path, build_snapshot())

    content = path.read_text(encoding="utf-8")
    assert content.startswith("{\n  ")
    assert json.loads(content)["chain_type"] == "sui"
    assert [entry.name for entry in tmp_path.iterdir()] == ["prices.json"]


def test_write_replaces_previous_snapshot(tmp_path) -> None:
    path = tmp_path / "prices.json"
    write_snapshot(path, build_snapshot(price_usd=1.0))

    write_snapshot(path, build_snapshot(price_usd=2.5))

    assert read_snapshot(path).price_usd == 2.5


def test_write_creates_missing_directory(tmp_path) -> None:
    path = tmp_path / "shared" / "prices.json"

    write_snapshot(path, build_snapshot())

    assert path.exists()


def test_read_missing_file(tmp_path) -> None:
    with pytest.raises(SnapshotFileMissing) as excinfo:
        read_snapshot(tmp_path / "prices.json")

    assert excinfo.value.status_code == 404
    assert excinfo.value.error_code == "FILE_NOT_FOUND"
    assert "Worker might not have run" in excinfo.value.message


def test_read_invalid_json(tmp_path) -> None:
    path = tmp_path / "prices.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SnapshotParseError) as excinfo:
        read_snapshot(path)

    assert excinfo.value.status_code == 500
    assert excinfo.value.error_code == "PARSE_ERROR"


@pytest.mark.parametrize(
    "content",
    [
        {"chain_type": "sui", "price_usd": 1.0},
        {
            "chain_type": "sui",
            "price_usd": "1.0",
            "price_native": 0.1,
            "market_cap": 0.0,
            "fdv": 0.0,
            "last_updated": "2026-01-20T10:00:00+00:00",
        },
        [1, 2, 3],
        {
            "chain_type": "sui",
            "price_usd": float("nan"),
            "price_native": 0.1,
            "market_cap": 0.0,
            "fdv": 0.0,
            "last_updated": "2026-01-20T10:00:00+00:00",
        },
        {
            "chain_type": "sui",
            "price_usd": 1.0,
            "price_native": 0.1,
            "market_cap": float("inf"),
            "fdv": 0.0,
            "last_updated": "2026-01-20T10:00:00+00:00",
        },
    ],
)
def test_read_schema_mismatch(tmp_path, content) -> None:
    path = tmp_path / "prices.json"
    path.write_text(json.dumps(content), encoding="utf-8")

    with pytest.raises(SnapshotParseError):
        read_snapshot(path)


def test_read_accepts_integer_numbers(tmp_path) -> None:
    path = tmp_path / "prices.json"
    path.write_text(
        json.dumps(
            {
                "chain_type": "sui",
                "price_usd": 1,
                "price_native": 0,
                "market_cap": 0,
                "fdv": 0,
                "last_updated": "2026-01-20T10:00:00+00:00",
            }
        ),
        encoding="utf-8",
    )

    assert read_snapshot(path).price_usd == 1.0
