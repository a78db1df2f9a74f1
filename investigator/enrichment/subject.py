"""Human-readable rendering of composite ``app:namespace:cluster`` subject keys.

Cluster values are often Kubernetes API server URLs pointing at internal
control-plane endpoints. The rendered subtitle never carries the raw URL: the
in-cluster address becomes ``in-cluster`` and any other URL is reduced to its
``host[:port]``.
"""

from __future__ import annotations

import re
from typing import Iterable
from urllib.parse import urlsplit

from investigator.reporting.models import SubjectDisplay

IN_CLUSTER_URL = "https://kubernetes.default.svc"
IN_CLUSTER_LABEL = "in-cluster"

_PROTOCOL = re.compile(r"^https?://", re.IGNORECASE)
_ANY_PROTOCOL = re.compile(r"https?://", re.IGNORECASE)


def _strip_protocol(value: str) -> str:
    # Removing one scheme can splice the remaining text into another.
    while _ANY_PROTOCOL.search(value):
        value = _ANY_PROTOCOL.sub("", value)
    return value


def normalize_cluster(value: str) -> str:
    if value == IN_CLUSTER_URL:
        return IN_CLUSTER_LABEL
    if not _PROTOCOL.match(value):
        return _strip_protocol(value)
    try:
        host = urlsplit(value).netloc
    except ValueError:
        return _strip_protocol(value)
    # netloc keeps userinfo; only host[:port] is shown.
    host = host.rpartition("@")[2]
    return host or _strip_protocol(value)


def format_subject_display(raw_subject: str) -> SubjectDisplay:
    parts = raw_subject.split(":")
    if len(parts) < 3:
        return SubjectDisplay(title=raw_subject, subtitle="")

    app = parts[0].strip()
    namespace = parts[1].strip()
    # Cluster URLs carry their own colons (scheme, port).
    cluster = ":".join(parts[2:]).strip()
    if not app or not namespace or not cluster:
        return SubjectDisplay(title=raw_subject, subtitle="")

    return SubjectDisplay(title=app, subtitle=f"{namespace} · {normalize_cluster(cluster)}")


def filter_subjects(options: Iterable[str], query: str = "") -> list[str]:
    """Subjects whose raw key, title or subtitle contains ``query`` (case-insensitive)."""
    needle = query.strip().lower()
    if not needle:
        return list(options)

    matches = []
    for raw in options:
        display = format_subject_display(raw)
        if (
            needle in raw.lower()
            or needle in display.title.lower()
            or needle in display.subtitle.lower()
        ):
            matches.append(raw)
    return matches
