from unittest.mock import MagicMock

from fetchcache.fetching.hooks import DEFAULT_FAILURE_MESSAGE, FetchHooks


def test_empty_hooks_are_noops():
    hooks = FetchHooks()
    hooks.start()
    hooks.end()
    hooks.error(RuntimeError("x"))


def test_from_collaborators_adapts_indicator_and_notifier(indicator):
    notifier = MagicMock()
    hooks = FetchHooks.from_collaborators(indicator, notifier)

    hooks.start()
    hooks.end()
    hooks.error(RuntimeError("x"))

    assert indicator.calls == [("show", {"no_backdrop": True}), ("hide",)]
    notifier.assert_called_once_with(DEFAULT_FAILURE_MESSAGE)


def test_custom_failure_message():
    on_error = MagicMock()
    exc = RuntimeError("x")
    FetchHooks(on_error=on_error, failure_message="offline").error(exc)
    on_error.assert_called_once_with("offline", exc)


def test_failing_hook_is_contained():
    hooks = FetchHooks(on_start=MagicMock(side_effect=RuntimeError("ui gone")))
    hooks.start()
