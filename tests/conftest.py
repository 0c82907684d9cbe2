"""Shared pytest fixtures and configuration for the bandou-utils test suite.

Guidelines
----------
* Classes under reflection come from ``sample_types`` (evaluated
  annotations) and ``postponed_types`` (string annotations); tests that mutate
  class state build a fresh class per test.
* No network, no filesystem writes outside ``tmp_path``.
* ``BANDOU_LOG_LEVEL`` from the developer's shell must not leak in.
"""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BANDOU_LOG_LEVEL", raising=False)
