import pytest


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config/logs
    monkeypatch.setenv("HOME", str(home))
    for var in ("TYPETEST_TEST_LENGTH_SECONDS", "TYPETEST_LINE_WIDTH", "TYPETEST_SEED"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def word_pool_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("# tiny pool\nalpha beta\ngamma\n\ndelta\n", encoding="utf-8")
    return path


@pytest.fixture
def passage_file(tmp_path):
    path = tmp_path / "passage.txt"
    path.write_text("the quick brown fox jumps over the lazy dog\n", encoding="utf-8")
    return path
