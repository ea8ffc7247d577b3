"""Tests for the moviemodeling package structure."""


def test_package_imports():
    """Test that main package can be imported."""
    import moviemodeling
    assert moviemodeling.__version__ == "0.1.0"


def test_service_subpackage():
    """Test that service subpackage exists."""
    import moviemodeling.service
    assert moviemodeling.service is not None


def test_client_subpackage():
    """Test that client subpackage exists."""
    import moviemodeling.client
    assert moviemodeling.client is not None


def test_modeling_public_api():
    """Test that the modeling subpackage exposes the four components."""
    from moviemodeling.service import modeling

    for name in ("Seeder", "QueryRouter", "BenchmarkAggregator", "HybridAccumulator"):
        assert hasattr(modeling, name)
