"""Tests for the dashboard example."""


class TestDashboardApp:
    """Verify the dashboard example renders its components."""

    def test_kpi_tiles(self, example_app) -> None:
        output = example_app.output
        assert output.count('data-slot="kpi"') == 3
        assert ">$48,210</h3>" in output
        assert ">1832</h3>" in output
        assert ">0</h3>" in output
        assert output.count("vs last month") == 2

    def test_activity_feed(self, example_app) -> None:
        output = example_app.output
        assert output.count('data-slot="activity-item"') == 2
        assert ">2m ago</span>" in output
        assert "Invoice &lt;#1042&gt; paid" in output
        assert "<#1042>" not in output

    def test_profile_card(self, example_app) -> None:
        output = example_app.output
        assert ">AL</div>" in output
        assert 'href="/users/7/edit"' in output
        assert ">Edit profile</a>" in output
        assert ">Admin</span>" in output
        assert ">ada@example.com</p>" in output
        assert 'data-slot="user-info"' in output

    def test_cards_nest(self, example_app) -> None:
        output = example_app.output
        assert output.count('<div data-slot="card"') == 2
        assert ">Recent activity</div>" in output
