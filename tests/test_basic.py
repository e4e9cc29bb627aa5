"""Basic tests to verify setup."""

import paip


def test_version():
    """Test that version is defined."""
    assert hasattr(paip, "__version__")
    assert paip.__version__ == "0.1.0"


def test_import():
    """Test that package can be imported."""
    assert paip.LlmClient is not None
    assert paip.ConfigError is not None
