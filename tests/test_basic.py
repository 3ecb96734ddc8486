"""
Basic test to verify the testing framework is working.
"""

from target_monitor.config.models import MonitorConfig, TargetEntry


def test_target_entry_creation():
    """Test that TargetEntry can be created from the targets file format."""
    entry = TargetEntry(code="005930", target=80000, name="Samsung Electronics")

    assert entry.identifier == "005930"
    assert entry.target_price == 80000
    assert entry.display_name == "Samsung Electronics"


def test_monitor_config_creation():
    """Test that MonitorConfig applies defaults."""
    config = MonitorConfig(targets=[{"code": "AAA", "target": 100}])

    assert config.targets[0].identifier == "AAA"
    assert config.schedule == "0 9-15 * * 1-5"
    assert config.quote_source == "naver"
    assert config.holiday_country == "KR"


def test_lazy_package_exports():
    """Test the lazily resolved package attributes."""
    import target_monitor

    assert target_monitor.TargetEntry is TargetEntry
    assert target_monitor.__version__ == "0.1.0"
