"""Randomly drawn records used as input to the logging benchmarks."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from ..attribute import Duration, Timestamp

ROOTS = (
    "http://www.example.com", "https://www.example.org",
    "https://www.example.net", "http://shop.example.com",
    "https://news.example.com", "https://store.example.org",
    "http://blog.example.net", "https://forum.example.com",
    "http://docs.example.org", "https://mail.example.net",
    "http://search.example.com", "https://portal.example.org",
    "http://classifieds.example.net", "https://social.example.com",
    "http://jobs.example.org", "https://video.example.net",
    "http://photos.example.com", "https://friends.example.org",
    "http://status.example.net", "https://stream.example.com",
)

COMMON_URIS = (
    "/", "/home", "/about", "/contact", "/products",
    "/services", "/blog", "/articles", "/news", "/portfolio",
    "/faq", "/login", "/register", "/profile", "/settings",
    "/downloads", "/support", "/events", "/gallery", "/sitemap",
)

STATUSES = (
    100, 101, 102, 103, 122,
    200, 201, 202, 203, 204, 205, 206, 207, 208, 226,
    300, 301, 302, 303, 304, 305, 306, 307, 308,
    400, 401, 402, 403, 404, 405, 406, 407, 408, 409, 410,
    411, 412, 413, 414, 415, 416, 417, 418, 421, 422, 423,
    424, 425, 426, 428, 429, 431, 451,
    500, 501, 502, 503, 504, 505, 506, 507, 508, 510, 511,
)

ANIMALS = (
    "Armadillo", "Bear", "Cheetah", "Dolphin", "Elephant",
    "Fox", "Giraffe", "Horse", "Iguana", "Jaguar",
    "Kangaroo", "Lion", "Monkey", "Nightingale", "Ostrich",
    "Penguin", "Quokka", "Raccoon", "Sloth", "Tiger",
    "Uakari", "Vulture", "Walrus", "X-ray Tetra", "Yak",
    "Zebra",
)

ADJECTIVES = (
    "Amiable", "Brilliant", "Caring", "Diligent", "Energetic",
    "Friendly", "Gracious", "Hopeful", "Inventive", "Joyful",
    "Kind-hearted", "Loyal", "Modest", "Nurturing", "Optimistic",
    "Patient", "Quaint", "Resilient", "Sincere", "Thoughtful",
    "Understanding", "Vivacious", "Witty", "Xenial", "Youthful",
    "Zesty",
)

MINUTE_NS = 60_000_000_000

_RNG = random.Random()


@dataclass(frozen=True)
class Request:
    """An HTTP request: the URL asked for and the status answered."""

    url: str
    status: int

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> Request:
        rng = rng if rng is not None else _RNG
        status = rng.choice(STATUSES)
        return cls(url=rng.choice(ROOTS) + rng.choice(COMMON_URIS), status=status)


@dataclass(frozen=True)
class BenchmarkData:
    """One benchmark input, with fields of every attribute type."""

    code: int
    value: float
    domain: str
    duration: Duration
    time: Timestamp
    request: Request

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> BenchmarkData:
        """Draw random data; the time lies within the last minute."""
        rng = rng if rng is not None else _RNG
        code = rng.randint(-20_000, 0)
        value = rng.uniform(-100.0, 100.0)
        duration = Duration(rng.randint(-MINUTE_NS, MINUTE_NS))
        moment = Timestamp(Timestamp.now().nanoseconds + rng.randint(-MINUTE_NS, 0))
        request = Request.random(rng)
        domain = rng.choice(ADJECTIVES) + " " + rng.choice(ANIMALS)
        return cls(
            code=code,
            value=value,
            domain=domain,
            duration=duration,
            time=moment,
            request=request,
        )