from storyboard_manager.core.link_tracker import check_links, is_link_broken


class TestCheckLinks:
    def test_existing_and_missing(self, make_scene, image_file, tmp_path):
        present = image_file("a.png")
        ok = make_scene("001", primary_image_path=str(present))
        gone = make_scene("002", primary_image_path=str(tmp_path / "gone.png"))
        none = make_scene("003")

        result = check_links([ok, gone, none])

        assert result == {ok.id: False, gone.id: True}

    def test_scenes_without_path_absent(self, make_scene):
        assert check_links([make_scene("001"), make_scene("002")]) == {}

    def test_injected_exists(self, make_scene):
        scenes = [make_scene("001", primary_image_path="x.png"),
                  make_scene("002", primary_image_path="y.png")]
        result = check_links(scenes, exists=lambda path: path == "x.png")
        assert result == {scenes[0].id: False, scenes[1].id: True}

    def test_reflects_later_changes(self, make_scene, image_file):
        path = image_file("later.png")
        scene = make_scene("001", primary_image_path=str(path))
        assert check_links([scene]) == {scene.id: False}

        path.unlink()
        assert check_links([scene]) == {scene.id: True}

    def test_does_not_modify_scenes(self, make_scene):
        scene = make_scene("001", primary_image_path="missing.png")
        before = scene.to_dict()
        check_links([scene])
        assert scene.to_dict() == before


class TestIsLinkBroken:
    def test_no_path_never_broken(self, make_scene):
        assert is_link_broken(make_scene("001"), exists=lambda p: False) is False

    def test_missing_path(self, make_scene):
        assert is_link_broken(make_scene("001", primary_image_path="nope.png"), exists=lambda p: False)
