"""Tests for the save status indicator."""

import asyncio

import pytest

from storyloom.application.editor import SaveStatusIndicator
from storyloom.domain.value_objects import SaveStatus


@pytest.mark.asyncio
async def test_saved_returns_to_idle_after_display_window() -> None:
    indicator = SaveStatusIndicator(saved_display=0.03, error_display=0.1)
    indicator.begin()
    indicator.succeed()
    assert indicator.status is SaveStatus.SAVED

    await asyncio.sleep(0.01)
    assert indicator.status is SaveStatus.SAVED
    await asyncio.sleep(0.05)
    assert indicator.status is SaveStatus.IDLE


@pytest.mark.asyncio
async def test_error_is_displayed_longer_than_saved() -> None:
    indicator = SaveStatusIndicator(saved_display=0.02, error_display=0.08)
    indicator.begin()
    indicator.fail()

    await asyncio.sleep(0.04)
    assert indicator.status is SaveStatus.ERROR
    await asyncio.sleep(0.08)
    assert indicator.status is SaveStatus.IDLE


@pytest.mark.asyncio
async def test_new_save_ends_display_window_early() -> None:
    seen: list[SaveStatus] = []
    indicator = SaveStatusIndicator(saved_display=0.03, listener=seen.append)
    indicator.begin()
    indicator.succeed()
    indicator.begin()

    await asyncio.sleep(0.06)
    assert indicator.status is SaveStatus.SAVING
    assert seen == [SaveStatus.SAVING, SaveStatus.SAVED, SaveStatus.SAVING]


@pytest.mark.asyncio
async def test_close_cancels_return_to_idle() -> None:
    indicator = SaveStatusIndicator(saved_display=0.02)
    indicator.begin()
    indicator.succeed()
    indicator.close()

    await asyncio.sleep(0.05)
    assert indicator.status is SaveStatus.SAVED


def test_finish_without_begin_is_rejected() -> None:
    indicator = SaveStatusIndicator()
    with pytest.raises(RuntimeError):
        indicator.succeed()
    assert indicator.status is SaveStatus.IDLE
