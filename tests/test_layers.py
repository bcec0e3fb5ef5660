"""
Tests for mapping import targets to layers.
"""
from onion_lint.config import OnionConfig
from onion_lint.layers import is_within, resolve_layer


def _config(layers):
    return OnionConfig.model_validate({
        "layers": layers,
        "rules": [{"from": name, "allowedImports": []} for name in layers],
    })


class TestResolveLayer:

    def test_target_inside_layer(self, ab_config, lint_cfg):
        assert resolve_layer("a/service", ab_config, lint_cfg) == "A"
        assert resolve_layer("b/deep/nested/repo", ab_config, lint_cfg) == "B"

    def test_layer_root_itself(self, ab_config, lint_cfg):
        assert resolve_layer("b", ab_config, lint_cfg) == "B"

    def test_no_match(self, ab_config, lint_cfg):
        assert resolve_layer("c/thing", ab_config, lint_cfg) is None
        assert resolve_layer("../a/thing", ab_config, lint_cfg) is None

    def test_matches_whole_path_components(self, lint_cfg):
        config = _config({"app": "src/app"})
        assert resolve_layer("src/application/service", config, lint_cfg) is None
        assert resolve_layer("src/app/service", config, lint_cfg) == "app"

    def test_nested_layers_use_longest_root(self, lint_cfg):
        outer_first = _config({"core": "src", "domain": "src/domain"})
        inner_first = _config({"domain": "src/domain", "core": "src"})

        for config in (outer_first, inner_first):
            assert resolve_layer("src/domain/model", config, lint_cfg) == "domain"
            assert resolve_layer("src/util", config, lint_cfg) == "core"

    def test_same_root_first_declared_wins(self, lint_cfg):
        config = _config({"first": "src", "second": "./src"})
        assert resolve_layer("src/x", config, lint_cfg) == "first"

    def test_dot_segments_are_collapsed(self, ab_config, lint_cfg):
        assert resolve_layer("b/../a/service", ab_config, lint_cfg) == "A"


class TestIsWithin:

    def test_containment(self, tmp_path):
        assert is_within(tmp_path / "a" / "b", tmp_path / "a")
        assert is_within(tmp_path / "a", tmp_path / "a")
        assert not is_within(tmp_path / "ab", tmp_path / "a")
        assert not is_within(tmp_path, tmp_path / "a")
