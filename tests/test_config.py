import pytest

from config import _int_setting


class TestIntSetting:

    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("DASHBOARD_MONTHS", raising=False)

        assert _int_setting("DASHBOARD_MONTHS", 6, minimum=1) == 6

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RENT_DUE_DAY", "10")

        assert _int_setting("RENT_DUE_DAY", 5, minimum=1, maximum=31) == 10

    def test_zero_months_rejected(self, monkeypatch):
        monkeypatch.setenv("DASHBOARD_MONTHS", "0")

        with pytest.raises(ValueError, match="DASHBOARD_MONTHS must be at least 1"):
            _int_setting("DASHBOARD_MONTHS", 6, minimum=1)

    @pytest.mark.parametrize("value", ["0", "32"])
    def test_due_day_outside_month_rejected(self, monkeypatch, value):
        monkeypatch.setenv("RENT_DUE_DAY", value)

        with pytest.raises(ValueError, match="between 1 and 31"):
            _int_setting("RENT_DUE_DAY", 5, minimum=1, maximum=31)
