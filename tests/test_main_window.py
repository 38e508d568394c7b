import pytest
from PySide6.QtWidgets import QMessageBox

from storyboard_manager.core.link_tracker import check_links
from storyboard_manager.core.store import SceneStore
from storyboard_manager.ui.main_window import StoryboardManager
from storyboard_manager.utils.models import Scene


@pytest.fixture
def image_path(image_file):
    return image_file("a.png")


@pytest.fixture
def store(tmp_path, image_path):
    store = SceneStore(tmp_path / "data" / "storyboard-db.json", clock=lambda: 4242).load()
    store.replace_scenes([Scene(id="a", code="001", primary_image_path=str(image_path))])
    return store


@pytest.fixture
def link_checks(monkeypatch):
    """
    Runs link checks synchronously and records the scenes each check saw.
    """
    calls = []

    def _check_links(self):
        calls.append(list(self.scenes))
        self._on_links_checked(check_links(self.scenes))

    monkeypatch.setattr(StoryboardManager, "_check_links", _check_links)
    return calls


@pytest.fixture
def dialogs(monkeypatch):
    """
    Replaces blocking message boxes with recorders.
    """
    shown = []

    def _record(kind):
        def _show(parent, title, text, *args, **kwargs):
            shown.append((kind, text))
            return QMessageBox.Ok
        return _show

    for kind in ("critical", "warning", "information"):
        monkeypatch.setattr(QMessageBox, kind, _record(kind))
    return shown


@pytest.fixture
def window(q_app, store, link_checks, dialogs):
    win = StoryboardManager(store)
    yield win
    q_app.processEvents()
    win.deleteLater()


class TestLinkRecheck:
    def test_text_edit_rechecks_links(self, window, link_checks):
        before = len(link_checks)
        window._update_scene_field("a", en_text="edited")

        assert len(link_checks) == before + 1
        assert link_checks[-1][0].en_text == "edited"

    def test_toggle_rechecks_links(self, window, link_checks):
        before = len(link_checks)
        window.toggle_character("a", True)

        assert len(link_checks) == before + 1
        assert link_checks[-1][0].character_image is True

    def test_deleted_image_reported_after_edit(self, window, image_path):
        assert window.missing_links == {"a": False}

        image_path.unlink()
        window._update_scene_field("a", en_text="edited")

        assert window.missing_links == {"a": True}
        assert "1 mất liên kết" in window.lbl_scene_count.text()

    def test_deleted_image_reported_after_toggle(self, window, image_path):
        image_path.unlink()
        window.toggle_character("a", True)
        assert window.missing_links == {"a": True}


class TestStoreWriteFailure:
    @pytest.fixture
    def read_only(self, store, monkeypatch):
        def _save():
            raise PermissionError("disk read-only")

        monkeypatch.setattr(store, "save", _save)
        return store

    def test_text_edit_failure_is_reported(self, window, read_only, dialogs):
        window._update_scene_field("a", en_text="edited")

        assert read_only.get_scene("a").en_text == ""
        assert window.scenes[0].en_text == ""
        assert dialogs == [("critical", "Không lưu được dữ liệu:\ndisk read-only")]
        assert "disk read-only" in window.statusbar.currentMessage()

    def test_toggle_failure_is_reported(self, window, read_only, dialogs):
        window.toggle_character("a", True)

        assert read_only.get_scene("a").character_image is False
        assert window.scenes[0].character_image is False
        assert [kind for kind, _ in dialogs] == ["critical"]

    def test_library_attach_failure_is_reported(self, window, read_only, dialogs):
        window._on_library_file_attached("a", "/lib/other.png")

        assert read_only.get_scene("a").primary_image_path.endswith("a.png")
        assert [kind for kind, _ in dialogs] == ["critical"]


class TestExportWarnings:
    def test_missing_images_kept_and_shown(self, window, dialogs):
        window._on_export_finished("/out/STORYBOARD_EXPORT.zip", ["/gone.png"], True)

        assert window.export_warnings == ["/gone.png"]
        assert "thiếu 1 ảnh" in window.lbl_export_status.text()
        assert window.lbl_export_status.toolTip() == "/gone.png"

        window.show_export_warnings()
        assert dialogs[-1] == ("warning", "Không tìm thấy 1 ảnh:\n/gone.png")

    def test_clean_export_clears_warnings(self, window, dialogs):
        window._on_export_finished("/out/STORYBOARD_EXPORT.zip", ["/gone.png"], True)
        window._on_export_finished("/out/STORYBOARD_EXPORT.zip", [], True)

        assert window.export_warnings == []
        assert window.lbl_export_status.toolTip() == ""

        window.show_export_warnings()
        assert dialogs[-1][0] == "information"
