from symbol_map.config import DEFAULT_STATUS_MESSAGE
from symbol_map.status import StatusLine


def test_starts_with_default_prompt():
    status = StatusLine()
    assert status.text == DEFAULT_STATUS_MESSAGE == "Hover over a circle for more details"
    assert status.is_default()


def test_update_and_reset():
    status = StatusLine("idle")
    status.update("busy")
    assert status.text == "busy"
    assert not status.is_default()
    status.update()
    assert status.text == "idle"


def test_subscribers_receive_current_and_new_text():
    status = StatusLine("idle")
    seen = []
    status.subscribe(seen.append)
    status.update("busy")
    status.update()
    assert seen == ["idle", "busy", "idle"]
