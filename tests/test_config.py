import json
import pytest
from pathlib import Path
from prebuilder.config import PrebuildSettings, env_exclusion_patterns, load_manifest, parse_tree_list
from prebuilder.exceptions import (
    ConfigurationError,
    ManifestMissingError,
    ManifestParsingError,
    ManifestValidationError,
)

BASE_MANIFEST = {
    'name': 'my-app',
    'version': '1.0.0',
    'prebuild': {
        'prebuild-base-path': '/var/cache/prebuilt',
        'excludeAddons': ['ember-data', 'ember-cli-*'],
        'trees': 'addon, templates',
    },
}

@pytest.fixture
def create_manifest(tmp_path: Path):
    """A pytest fixture to create a temporary package.json."""
    def _create_file(data) -> Path:
        (tmp_path / "package.json").write_text(data if isinstance(data, str) else json.dumps(data))
        return tmp_path
    return _create_file

class TestManifestLoading:
    """Tests for reading package.json files."""

    def test_load_valid_manifest_successfully(self, create_manifest):
        root = create_manifest(BASE_MANIFEST)
        assert load_manifest(root) == BASE_MANIFEST

    def test_missing_manifest_raises_error(self, tmp_path):
        with pytest.raises(ManifestMissingError, match="Manifest not found"):
            load_manifest(tmp_path / "missing")

    def test_invalid_json_raises_error(self, create_manifest):
        root = create_manifest('{"name": "my-app",')
        with pytest.raises(ManifestParsingError, match="Error parsing manifest"):
            load_manifest(root)

    def test_non_object_raises_error(self, create_manifest):
        root = create_manifest(["not", "an", "object"])
        with pytest.raises(ManifestParsingError, match="must contain a JSON object"):
            load_manifest(root)

    def test_manifest_errors_are_configuration_errors(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_manifest(tmp_path)


class TestPrebuildSettings:
    """Tests for the `prebuild` section model."""

    def test_aliases_are_parsed(self):
        settings = PrebuildSettings.from_manifest(BASE_MANIFEST)
        assert settings.base_path == '/var/cache/prebuilt'
        assert settings.exclusion_patterns() == ['ember-data', 'ember-cli-*']
        assert settings.trees == ['addon', 'templates']

    def test_missing_section_gives_defaults(self):
        settings = PrebuildSettings.from_manifest({'name': 'my-app'})
        assert settings.base_path is None
        assert settings.exclusion_patterns() == []
        assert settings.trees is None

    def test_single_exclusion_string(self):
        settings = PrebuildSettings.from_manifest({'prebuild': {'excludeAddons': 'ember-data'}})
        assert settings.exclusion_patterns() == ['ember-data']

    def test_empty_base_path_means_default(self):
        assert PrebuildSettings.from_manifest({'prebuild': {'prebuild-base-path': ''}}).base_path is None

    def test_unknown_keys_are_kept(self):
        settings = PrebuildSettings.from_manifest({'prebuild': {'futureOption': True}})
        assert settings.model_extra == {'futureOption': True}

    def test_section_must_be_an_object(self):
        with pytest.raises(ManifestValidationError, match="must be an object"):
            PrebuildSettings.from_manifest({'prebuild': ['addon']})

    def test_wrong_types_raise_validation_error(self):
        with pytest.raises(ManifestValidationError, match="Invalid 'prebuild' section"):
            PrebuildSettings.from_manifest({'prebuild': {'excludeAddons': 42}})

    def test_empty_exclusion_entries_are_rejected(self):
        with pytest.raises(ConfigurationError, match="must not contain empty entries"):
            PrebuildSettings.from_manifest({'prebuild': {'excludeAddons': ['ember-data', '']}})


class TestEnvironmentExclusions:

    @pytest.mark.parametrize("value, expected", [
        ("", []),
        ("ember-data", ["ember-data"]),
        ("ember-data, ember-cli-*", ["ember-data", "ember-cli-*"]),
        ("a,,b,", ["a", "b"]),
        ('["ember-data", "ember-(ajax|fetch)"]', ["ember-data", "ember-(ajax|fetch)"]),
    ])
    def test_parsing(self, monkeypatch, value, expected):
        monkeypatch.setenv("EXCLUDEADDONS", value)
        assert env_exclusion_patterns() == expected

    def test_unset(self):
        assert env_exclusion_patterns() == []

    @pytest.mark.parametrize("value", ['["unterminated"', '[1, 2]'])
    def test_invalid_json_array(self, monkeypatch, value):
        monkeypatch.setenv("EXCLUDEADDONS", value)
        with pytest.raises(ConfigurationError, match="EXCLUDEADDONS"):
            env_exclusion_patterns()


def test_parse_tree_list():
    assert parse_tree_list(" addon ,templates,,addon-test-support ") == ["addon", "templates", "addon-test-support"]
