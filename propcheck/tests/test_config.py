"""Tests for plugin option parsing and YAML loading."""

from propcheck.core.instrument.config import PluginOptions, load_options_file, parse_options


class TestParseOptions:
    def test_defaults(self):
        options, ignored = parse_options(None)
        assert options == PluginOptions()
        assert options.class_component_extends == ["Component", "PureComponent"]
        assert options.class_component_extends_object == []
        assert options.log_ignored_binding is True
        assert options.log_ignored_class_component_extends is True
        assert ignored == []

    def test_lists_extend_defaults(self):
        options, ignored = parse_options({
            "classComponentExtends": ["AppComponent"],
            "classComponentExtendsObject": ("UI",),
        })
        assert options.class_component_extends == ["Component", "PureComponent", "AppComponent"]
        assert options.class_component_extends_object == ["UI"]
        assert ignored == []

    def test_defaults_are_not_shared(self):
        first, _ = parse_options({"classComponentExtends": ["AppComponent"]})
        second, _ = parse_options({})
        assert "AppComponent" in first.class_component_extends
        assert "AppComponent" not in second.class_component_extends

    def test_scalar_list_option_is_ignored(self):
        options, ignored = parse_options({"classComponentExtendsObject": "UI"})
        assert options.class_component_extends_object == []
        assert ignored == [{"classComponentExtendsObject": "UI"}]

    def test_non_string_members_are_ignored(self):
        options, ignored = parse_options({"classComponentExtends": ["Base", 3]})
        assert options.class_component_extends == ["Component", "PureComponent"]
        assert ignored == [{"classComponentExtends": ["Base", 3]}]

    def test_log_flags(self):
        options, _ = parse_options({"logIgnoredBinding": False, "logIgnoredClassComponentExtends": 0})
        assert options.log_ignored_binding is False
        assert options.log_ignored_class_component_extends is False

    def test_none_means_unset(self):
        options, ignored = parse_options({"classComponentExtends": None, "logIgnoredBinding": None})
        assert options == PluginOptions()
        assert ignored == []

    def test_unknown_keys_reported_together_last(self):
        _, ignored = parse_options({"foo": 1, "classComponentExtends": "X", "bar": 2})
        assert ignored == [{"classComponentExtends": "X"}, {"foo": 1, "bar": 2}]

    def test_input_is_not_mutated(self):
        raw = {"classComponentExtends": ["A"], "foo": 1}
        parse_options(raw)
        assert raw == {"classComponentExtends": ["A"], "foo": 1}


class TestLoadOptionsFile:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "propcheck.yaml"
        path.write_text(
            "classComponentExtends:\n"
            "  - AppComponent\n"
            "logIgnoredBinding: false\n"
        )
        assert load_options_file(path) == {
            "classComponentExtends": ["AppComponent"],
            "logIgnoredBinding": False,
        }

    def test_missing_file(self, tmp_path):
        assert load_options_file(tmp_path / "missing.yaml") == {}

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_options_file(path) == {}

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- Component\n")
        assert load_options_file(str(path)) == {}

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("classComponentExtends: [Component\n")
        assert load_options_file(path) == {}
