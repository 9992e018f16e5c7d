"""Tests for settings and rubric loading."""

import pydantic
import pytest

from pr_autograder.config import DEFAULT_RUBRIC_PATH, load_rubric, load_settings


class TestLoadSettings:
    def test_reads_yaml(self, tmp_path):
        config = tmp_path / "config.yml"
        config.write_text(
            "repo_names: [hw1, hw2]\n"
            "user_names: [acme]\n"
            "gemini_api_key: abc\n"
            "port: 9000\n"
        )

        settings = load_settings(config)

        assert settings.repo_names == frozenset({"hw1", "hw2"})
        assert settings.allow_list.permits_owner("acme")
        assert settings.allow_list.permits_repo("hw2")
        assert settings.port == 9000
        assert settings.readme_path == "README.md"
        assert settings.rubric_file == DEFAULT_RUBRIC_PATH
        assert settings.static_dir is None

    def test_api_key_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        config = tmp_path / "config.yml"
        config.write_text("repo_names: [hw1]\nuser_names: [acme]\n")

        assert load_settings(config).gemini_api_key == "from-env"

    def test_missing_api_key(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.chdir(tmp_path)
        config = tmp_path / "config.yml"
        config.write_text("repo_names: [hw1]\n")

        with pytest.raises(pydantic.ValidationError):
            load_settings(config)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yml")

    def test_overrides_and_relative_rubric(self, tmp_path):
        config = tmp_path / "config.yml"
        config.write_text("gemini_api_key: abc\nrubric_file: rubrics/hw2.yml\n")

        settings = load_settings(config, port="8181", host=None)

        assert settings.port == 8181
        assert settings.host == "0.0.0.0"
        assert settings.rubric_file == tmp_path / "rubrics" / "hw2.yml"

    def test_settings_are_frozen(self, settings):
        with pytest.raises(pydantic.ValidationError):
            settings.repo_names = frozenset({"other"})


class TestLoadRubric:
    def test_packaged_rubric(self):
        rubric = load_rubric(DEFAULT_RUBRIC_PATH)

        assert rubric.name == "github_assignment_review"
        assert rubric.version >= 1
        for label in ("> a.", "> d.", "> h.", "more_details_needed"):
            assert label in rubric.prompt

    def test_rubric_requires_prompt(self, tmp_path):
        path = tmp_path / "rubric.yml"
        path.write_text("name: x\nversion: 1\nprompt: ''\n")

        with pytest.raises(pydantic.ValidationError):
            load_rubric(path)
