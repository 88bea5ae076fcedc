"""Common test fixtures for unit tests."""

import pytest


@pytest.fixture
def no_openai_key(monkeypatch):
    """Fixture removing the OpenAI API key from the environment."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)


@pytest.fixture
def openai_key(monkeypatch):
    """Fixture providing a dummy OpenAI API key."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test123456789")
    return "sk-test123456789"


@pytest.fixture
def sample_article():
    """Fixture providing a short multi-paragraph article."""
    return """Quantum computers use qubits instead of bits.

    In 2019, Google claimed quantum supremacy with a 53-qubit processor.
    Critics at IBM argued that a classical supercomputer could do the same task in 2.5 days.

    The field is still young.\tMany problems remain unsolved.
    """


@pytest.fixture
def sample_text_file(tmp_path):
    """Fixture providing a sample text file for testing."""
    file_path = tmp_path / "sample.txt"
    with open(file_path, "w", encoding="utf-8") as f:
        f.write("This is sample text for testing.\nLine 2 of the sample text.")
    return file_path
