"""Capability protocols read by policies.

Policies depend only on these attributes so full structs, summaries and test
doubles are interchangeable and no storage query is ever needed.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Owned(Protocol):
    user_id: Optional[int]


@runtime_checkable
class RaceStateful(Protocol):
    @property
    def is_completed(self) -> bool: ...


@runtime_checkable
class IncidentStateful(Protocol):
    @property
    def is_unofficial(self) -> bool: ...


@runtime_checkable
class ReportStateful(Protocol):
    user_id: Optional[int]

    @property
    def is_draft(self) -> bool: ...

    @property
    def is_submitted(self) -> bool: ...


@runtime_checkable
class TemplateDerived(Protocol):
    @property
    def is_standard(self) -> bool: ...
