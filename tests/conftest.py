"""
Pytest configuration and shared fixtures.
"""

from typing import Any, Dict, List

import pytest

from stationpref.logger import get_logger, reset_logger
from stationpref.models import StationCandidate

from .fakes import FakeResolver, station


@pytest.fixture(autouse=True)
def quiet_logger(tmp_path):
    """Route the global logger to a temp dir and keep the console clean."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture
def stations() -> Dict[str, List[StationCandidate]]:
    return {
        "渋谷": [
            station("渋谷", "JR山手線", "東京都", "1500043"),
            station("渋谷", "東京メトロ銀座線", "東京都", "1500002"),
        ],
        "新宿": [station("新宿", "JR山手線", "東京都", "1600022")],
        "梅田": [station("梅田", "大阪メトロ御堂筋線", "大阪府", "5300001")],
        "大手町": [
            station("大手町", "東京メトロ丸ノ内線", "東京都", "1000004"),
            station("大手町", "広島電鉄本線", "広島県", "7300051"),
        ],
        "空港": [station("空港", "なし", "どこか", "0000000")],
    }


@pytest.fixture
def addresses() -> Dict[str, str]:
    return {
        "1500043": "東京都渋谷区道玄坂",
        "1500002": "東京都渋谷区渋谷",
        "1600022": "東京都新宿区新宿",
        "5300001": "大阪府大阪市北区梅田",
        "1000004": "東京都千代田区大手町",
        "7300051": "広島県広島市中区大手町",
    }


@pytest.fixture
def fake_resolver(stations, addresses) -> FakeResolver:
    return FakeResolver(stations, addresses)


@pytest.fixture
def heartrails_payload() -> Dict[str, Any]:
    """Sample HeartRails getStations body."""
    return {
        "response": {
            "station": [
                {
                    "name": "渋谷",
                    "prefecture": "東京都",
                    "line": "JR山手線",
                    "x": 139.701238,
                    "y": 35.658871,
                    "postal": "1500043",
                    "prev": "原宿",
                    "next": "恵比寿",
                },
                {
                    "name": "渋谷",
                    "prefecture": "東京都",
                    "line": "東京メトロ銀座線",
                    "x": 139.701636,
                    "y": 35.659,
                    "postal": "1500002",
                    "prev": None,
                    "next": "表参道",
                },
            ]
        }
    }


@pytest.fixture
def postal_payload() -> Dict[str, Any]:
    """Sample jp-postal-code-api body."""
    return {
        "postalCode": "1500043",
        "addresses": [
            {
                "prefectureCode": "13",
                "ja": {
                    "prefecture": "東京都",
                    "address1": "渋谷区",
                    "address2": "道玄坂",
                    "address3": "",
                    "address4": "",
                },
                "kana": {
                    "prefecture": "トウキョウト",
                    "address1": "シブヤク",
                    "address2": "ドウゲンザカ",
                    "address3": "",
                    "address4": "",
                },
                "en": {
                    "prefecture": "Tokyo",
                    "address1": "Shibuya-ku",
                    "address2": "Dogenzaka",
                    "address3": "",
                    "address4": "",
                },
            }
        ],
    }
