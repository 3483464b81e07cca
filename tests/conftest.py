"""
Pytest configuration and shared fixtures.
"""

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from oeisbot.logger import get_logger, reset_logger


def make_wire_record(number: int, **overrides) -> Dict[str, Any]:
    """Minimal valid OEIS search entry."""
    record = {
        "number": number,
        "data": "1,2,3",
        "name": f"Test sequence {number}",
        "keyword": "nonn",
        "offset": "0,2",
        "author": "_Test Author_",
        "references": 0,
        "revision": 1,
        "time": "2024-01-01T00:00:00-05:00",
        "created": "2020-01-01T00:00:00-05:00",
    }
    record.update(overrides)
    return record


def make_response(status_code: int = 200, body: Any = None, text: Optional[str] = None,
                  url: str = "https://oeis.org/search") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    resp.reason = "OK" if status_code < 400 else "Error"
    resp.encoding = "utf-8"
    resp._content = (json.dumps(body) if text is None else text).encode("utf-8")
    return resp


class FakeOeis:
    """Stands in for requests.get against the search endpoint."""

    def __init__(self):
        self.records: Dict[int, List[Dict[str, Any]]] = {}
        self.responses: Dict[int, Any] = {}
        self.calls: List[Dict[str, Any]] = []

    def add(self, number: int, **overrides) -> Dict[str, Any]:
        record = make_wire_record(number, **overrides)
        self.records[number] = [record]
        return record

    def __call__(self, url, params=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        number = int(params["q"].split(":A", 1)[1])
        override = self.responses.get(number)
        if isinstance(override, BaseException):
            raise override
        if override is not None:
            return override
        return make_response(200, self.records.get(number, []))

    @property
    def requested_numbers(self) -> List[int]:
        return [int(c["params"]["q"].split(":A", 1)[1]) for c in self.calls]


class ScriptedRng:
    """random.Random replacement that returns a fixed series of draws."""

    def __init__(self, draws: List[int]):
        self.draws = list(draws)
        self.bounds = []

    def randint(self, a: int, b: int) -> int:
        self.bounds.append((a, b))
        return self.draws.pop(0)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger with no console output for every test."""
    reset_logger()
    get_logger(enable_console=False)
    yield
    reset_logger()


@pytest.fixture
def fake_oeis(monkeypatch) -> FakeOeis:
    fake = FakeOeis()
    monkeypatch.setattr("oeisbot.fetch.requests.get", fake)
    return fake


@pytest.fixture
def fibonacci_record() -> Dict[str, Any]:
    """Trimmed copy of the A000045 search entry."""
    return {
        "number": 45,
        "id": "M0692 N0256",
        "data": "0,1,1,2,3,5,8,13,21,34,55,89,144,233,377,610,987,1597,2584,4181,6765",
        "name": "Fibonacci numbers: F(n) = F(n-1) + F(n-2) with F(0) = 0 and F(1) = 1.",
        "comment": [
            "Also called Lamé's sequence.",
            "F(n+2) = number of binary sequences of length n that have no consecutive 0's.",
        ],
        "reference": ["V. E. Hoggatt, Jr., Fibonacci and Lucas Numbers. Houghton, Boston, MA, 1969."],
        "link": ["N. J. A. Sloane, <a href=\"/A000045/b000045.txt\">The first 2000 Fibonacci numbers</a>"],
        "formula": ["G.f.: x/(1 - x - x^2)."],
        "example": ["For n = 3, F(3) = 2."],
        "maple": ["A000045 := proc(n) combinat[fibonacci](n) end proc;"],
        "mathematica": ["Fibonacci[Range[0, 40]]"],
        "program": ["(PARI) a(n)=fibonacci(n)"],
        "xref": ["Cf. A000032, A000071."],
        "keyword": "core,nonn,nice,easy,hear,changed",
        "offset": "0,4",
        "author": "_N. J. A. Sloane_, 1964",
        "ext": ["Edited by _N. J. A. Sloane_, Feb 04 2007"],
        "references": 2467,
        "revision": 1234,
        "time": "2024-05-01T12:00:00-04:00",
        "created": "1991-04-30T03:00:00-04:00",
    }
