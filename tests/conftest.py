# tests/conftest.py
import pytest

from news_autocompleter.utils.config_manager import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    # keep log output in the test's tmp dir and ignore the caller's environment
    monkeypatch.setenv("NEWS_SUGGEST_LOG_PATH", str(tmp_path / "logs" / "test.log"))
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def words_file(tmp_path):
    p = tmp_path / "words.txt"
    p.write_text("apple\napplication\n\n  apply  \ncat\n", encoding="utf-8")
    return p


@pytest.fixture
def titles_file(tmp_path):
    p = tmp_path / "titles.txt"
    p.write_text("Catalog News\nApple earnings beat forecasts\nWorld Cup final\n", encoding="utf-8")
    return p
