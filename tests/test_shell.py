import pytest

from programming_helper.panels.component_namer import ComponentNamerPanel
from programming_helper.panels.summarizer import SummarizerPanel
from programming_helper.shell import (
    DEFAULT_TAB,
    PANEL_TYPES,
    TABS,
    Shell,
    ShellSessions,
    create_panel,
    find_tab,
)

from .conftest import FakeGateway


def test_tab_layout():
    assert [tab.slug for tab in TABS] == [
        "grammar-checker",
        "image-prompt",
        "sentence-rewriter",
        "summarizer",
        "clean-code",
        "component-namer",
        "unit-test",
        "story-book",
    ]
    assert set(PANEL_TYPES) == {
        "grammar-checker",
        "image-prompt",
        "sentence-rewriter",
        "summarizer",
        "component-namer",
    }


def test_default_tab_is_component_namer(gateway):
    shell = Shell(gateway)

    assert shell.active_tab.slug == DEFAULT_TAB == "component-namer"
    assert isinstance(shell.active_panel, ComponentNamerPanel)


def test_select_mounts_fresh_panel(gateway):
    shell = Shell(gateway)
    shell.active_panel.apply_form({"text": "a modal dialog", "count": "5"})

    shell.select("summarizer")
    assert isinstance(shell.active_panel, SummarizerPanel)

    panel = shell.select("component-namer")
    assert panel is shell.active_panel
    assert panel.input_text == ""
    assert panel.count == 3
    assert panel.messages == []


@pytest.mark.parametrize("slug", ["clean-code", "unit-test", "story-book"])
def test_placeholder_tabs_mount_nothing(gateway, slug):
    shell = Shell(gateway)

    assert shell.select(slug) is None
    assert shell.active_tab.slug == slug
    assert shell.panel_for(slug) is None


def test_panel_for_only_returns_active_panel(gateway):
    shell = Shell(gateway)

    assert shell.panel_for("component-namer") is shell.active_panel
    assert shell.panel_for("summarizer") is None


def test_unknown_slugs_raise_key_error(gateway):
    shell = Shell(gateway)
    with pytest.raises(KeyError):
        shell.select("does-not-exist")
    assert shell.active_tab.slug == DEFAULT_TAB
    with pytest.raises(KeyError):
        find_tab("nope")
    with pytest.raises(KeyError):
        create_panel("clean-code", gateway)


def test_sessions_are_isolated():
    sessions = ShellSessions(FakeGateway())

    first_id, first = sessions.get_or_create(None)
    second_id, second = sessions.get_or_create("unknown-cookie")
    again_id, again = sessions.get_or_create(first_id)

    assert first_id != second_id
    assert again_id == first_id
    assert again is first
    assert second is not first
    assert len(sessions) == 2


def test_sessions_drop_least_recently_used_shell():
    sessions = ShellSessions(FakeGateway(), max_sessions=2)

    first_id, first = sessions.get_or_create(None)
    second_id, _ = sessions.get_or_create(None)
    # Touching the first session makes the second one the oldest.
    assert sessions.get_or_create(first_id)[1] is first
    third_id, _ = sessions.get_or_create(None)

    assert len(sessions) == 2
    assert first_id in sessions
    assert third_id in sessions
    assert second_id not in sessions

    new_id, _ = sessions.get_or_create(second_id)
    assert new_id != second_id
    assert len(sessions) == 2


def test_sessions_need_room_for_one_shell():
    with pytest.raises(ValueError):
        ShellSessions(FakeGateway(), max_sessions=0)
