import asyncio

import pytest

from clipscribe.errors import BackendError, InvalidApiKeyError
from clipscribe.pipeline.credentials import ApiKeySettings, mask_api_key


def _run_with(gateway, settle, coro_factory, *resolutions):
    async def scenario():
        task = asyncio.create_task(coro_factory())
        for operation, value in resolutions:
            await settle()
            if isinstance(value, Exception):
                gateway.pending[operation][-1].set_exception(value)
            else:
                gateway.resolve(operation, value)
        return await task

    return asyncio.run(scenario())


def test_mask_shows_last_four():
    assert mask_api_key("sk-abcdef123456") == "***3456"


def test_masked_hint(gateway, settle_tasks):
    settings = ApiKeySettings(gateway)
    assert _run_with(gateway, settle_tasks, settings.masked_hint, ("get_api_key", "sk-test-9876")) == "***9876"
    assert _run_with(gateway, settle_tasks, settings.masked_hint, ("get_api_key", None)) is None


def test_masked_hint_failure_is_logged_not_raised(gateway, settle_tasks):
    settings = ApiKeySettings(gateway)
    result = _run_with(
        gateway, settle_tasks, settings.masked_hint,
        ("get_api_key", BackendError("get_api_key", "settings unreadable")),
    )
    assert result is None


@pytest.mark.parametrize("api_key", ["", "***1234"])
def test_save_rejects_empty_or_masked_input(gateway, api_key):
    with pytest.raises(InvalidApiKeyError, match="Please enter a valid API key"):
        asyncio.run(ApiKeySettings(gateway).save(api_key))
    assert gateway.calls == []


def test_save_rejects_key_backend_reports_invalid(gateway, settle_tasks):
    settings = ApiKeySettings(gateway)
    with pytest.raises(InvalidApiKeyError, match="Invalid API key"):
        _run_with(
            gateway, settle_tasks, lambda: settings.save("sk-bad"),
            ("validate_api_key", False),
        )
    assert gateway.count("save_api_key") == 0


def test_save_validates_then_stores(gateway, settle_tasks, machine):
    settings = ApiKeySettings(gateway)
    _run_with(
        gateway, settle_tasks, lambda: settings.save("sk-good"),
        ("validate_api_key", True),
        ("save_api_key", None),
    )
    assert gateway.calls == [("validate_api_key", ("sk-good",)), ("save_api_key", ("sk-good",))]
    assert machine.state.status == "ready"


def test_save_propagates_backend_failure(gateway, settle_tasks):
    settings = ApiKeySettings(gateway)
    with pytest.raises(BackendError, match="network down"):
        _run_with(
            gateway, settle_tasks, lambda: settings.save("sk-good"),
            ("validate_api_key", BackendError("validate_api_key", "network down")),
        )
