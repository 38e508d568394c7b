import json

import pytest
from PySide6.QtCore import QSettings

from storyboard_manager.core.store import SceneStore, default_data_path, validate_document
from storyboard_manager.utils.errors import SceneNotFoundError, StoreFormatError, StoryboardError
from storyboard_manager.utils.models import AppSettings, Scene


@pytest.fixture
def data_path(tmp_path):
    return tmp_path / "data" / "storyboard-db.json"


@pytest.fixture
def store(data_path):
    return SceneStore(data_path, clock=lambda: 4242).load()


def write_document(path, document):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")


def scene_dict(scene_id="s1", code="001", **extra):
    data = {"id": scene_id, "code": code, "enText": "", "viText": "", "keywords": "",
            "primaryImagePath": None, "characterImage": False, "updatedAt": 0}
    data.update(extra)
    return data


class TestLoad:
    def test_missing_file_creates_default(self, data_path):
        store = SceneStore(data_path).load()
        assert store.read_scenes() == []
        assert store.read_settings() == AppSettings()
        saved = json.loads(data_path.read_text(encoding="utf-8"))
        assert saved["scenes"] == []
        assert saved["settings"]["autosaveEnabled"] is False

    def test_loads_existing_document(self, data_path):
        write_document(data_path, {
            "settings": {"autosaveEnabled": True, "saveDirectory": "/out",
                         "lastSavedAt": 10, "libraryRoots": ["/lib"]},
            "scenes": [scene_dict(enText="Hello", primaryImagePath="/a.png", characterImage=True)],
        })

        store = SceneStore(data_path).load()

        settings = store.read_settings()
        assert settings.autosave_enabled is True
        assert settings.library_roots == ["/lib"]
        scene = store.get_scene("s1")
        assert scene.en_text == "Hello"
        assert scene.primary_image_path == "/a.png"
        assert scene.character_image is True

    def test_invalid_json(self, data_path):
        data_path.parent.mkdir(parents=True)
        data_path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreFormatError):
            SceneStore(data_path).load()

    def test_reset_backs_up_corrupt_file(self, data_path):
        data_path.parent.mkdir(parents=True)
        data_path.write_text("{not json", encoding="utf-8")
        store = SceneStore(data_path)
        with pytest.raises(StoreFormatError):
            store.load()

        store.reset()

        assert data_path.with_suffix(".corrupt.json").read_text(encoding="utf-8") == "{not json"
        assert store.read_scenes() == []
        assert json.loads(data_path.read_text(encoding="utf-8"))["scenes"] == []

    def test_requires_load(self, data_path):
        with pytest.raises(StoryboardError):
            SceneStore(data_path).read_scenes()


class TestValidateDocument:
    @pytest.mark.parametrize("document", [
        [],
        {"scenes": {}},
        {"scenes": [scene_dict(characterImage="yes")]},
        {"scenes": [scene_dict(updatedAt="now")]},
        {"scenes": [scene_dict(primaryImagePath=5)]},
        {"scenes": [{"code": "001"}]},
        {"scenes": [scene_dict("dup"), scene_dict("dup")]},
        {"settings": {"libraryRoots": "not-a-list"}},
        {"settings": {"autosaveEnabled": "true"}},
    ])
    def test_rejects_invalid_shapes(self, document):
        with pytest.raises(StoreFormatError):
            validate_document(document)

    def test_empty_document(self):
        settings, scenes = validate_document({})
        assert settings == AppSettings()
        assert scenes == []


class TestMutations:
    def test_replace_scenes(self, store, data_path):
        saved = store.replace_scenes([Scene(id="a", code="001"), Scene(id="b", code="002")])
        assert [s.id for s in saved] == ["a", "b"]

        saved = store.replace_scenes([Scene(id="c", code="005")])
        assert [s.id for s in store.read_scenes()] == ["c"]

        on_disk = json.loads(data_path.read_text(encoding="utf-8"))
        assert [s["id"] for s in on_disk["scenes"]] == ["c"]

    def test_save_keeps_backup(self, store, data_path):
        store.replace_scenes([Scene(id="a", code="001")])
        store.replace_scenes([Scene(id="b", code="002")])
        backup = json.loads(data_path.with_suffix(".backup.json").read_text(encoding="utf-8"))
        assert [s["id"] for s in backup["scenes"]] == ["a"]

    def test_update_scene_fields(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        updated = store.update_scene_fields("a", en_text="Hi", keywords="sky")
        assert updated.en_text == "Hi"
        assert updated.keywords == "sky"
        assert updated.updated_at == 4242

    def test_update_unknown_field(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        with pytest.raises(ValueError):
            store.update_scene_fields("a", id="b")

    def test_toggle_character(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        assert store.toggle_character("a", True).character_image is True
        assert store.get_scene("a").character_image is True

    def test_missing_scene_raises(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        with pytest.raises(SceneNotFoundError) as info:
            store.update_scene(Scene(id="gone", code="002"))
        assert info.value.scene_id == "gone"
        with pytest.raises(SceneNotFoundError):
            store.toggle_character("gone", True)
        with pytest.raises(SceneNotFoundError):
            store.attach_scene_image("gone", b"x", "png")
        assert [s.id for s in store.read_scenes()] == ["a"]

    def test_read_scenes_returns_copies(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        store.read_scenes()[0].en_text = "changed"
        assert store.get_scene("a").en_text == ""

    def test_attach_scene_image(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        updated = store.attach_scene_image("a", b"IMG", ".jpg")
        assert updated.primary_image_path.endswith("a_4242.jpg")
        with open(updated.primary_image_path, "rb") as f:
            assert f.read() == b"IMG"
        assert store.asset_dir.name == "assets"

    def test_assign_image_path(self, store):
        store.replace_scenes([Scene(id="a", code="001")])
        assert store.assign_image_path("a", "/lib/knife.png").primary_image_path == "/lib/knife.png"

    def test_save_settings(self, store, data_path):
        store.save_settings(AppSettings(autosave_enabled=True, save_directory="/out"))
        reloaded = SceneStore(data_path).load()
        assert reloaded.read_settings().autosave_enabled is True
        assert reloaded.read_settings().save_directory == "/out"


class TestWriteFailures:
    @pytest.fixture
    def failing_save(self, store, monkeypatch):
        def _save():
            raise PermissionError("disk read-only")

        store.replace_scenes([Scene(id="a", code="001", en_text="before")])
        monkeypatch.setattr(store, "save", _save)
        return store

    def test_field_update_keeps_cached_scene(self, failing_save):
        with pytest.raises(PermissionError):
            failing_save.update_scene_fields("a", en_text="edited")
        assert failing_save.get_scene("a").en_text == "before"
        assert failing_save.get_scene("a").updated_at == 0

    def test_toggle_keeps_cached_scene(self, failing_save):
        with pytest.raises(PermissionError):
            failing_save.toggle_character("a", True)
        assert failing_save.get_scene("a").character_image is False

    def test_replace_keeps_previous_scenes(self, failing_save):
        with pytest.raises(PermissionError):
            failing_save.replace_scenes([Scene(id="b", code="002")])
        assert [s.id for s in failing_save.read_scenes()] == ["a"]

    def test_settings_unchanged(self, failing_save):
        with pytest.raises(PermissionError):
            failing_save.save_settings(AppSettings(save_directory="/out"))
        assert failing_save.read_settings().save_directory == ""

    def test_document_untouched_when_write_fails(self, store, data_path, monkeypatch):
        store.replace_scenes([Scene(id="a", code="001")])
        before = data_path.read_text(encoding="utf-8")

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("storyboard_manager.utils.utils.os.replace", failing_replace)
        with pytest.raises(OSError):
            store.update_scene_fields("a", en_text="edited")

        assert data_path.read_text(encoding="utf-8") == before
        assert not data_path.with_name(data_path.name + ".tmp").exists()
        assert store.get_scene("a").en_text == ""


class TestDefaultDataPath:
    def test_data_dir_override(self, tmp_path, q_app):
        settings = QSettings(str(tmp_path / "prefs.ini"), QSettings.IniFormat)
        settings.setValue("data_dir", str(tmp_path / "custom"))
        assert default_data_path(settings) == tmp_path / "custom" / "storyboard-db.json"
