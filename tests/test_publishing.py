import pytest

from core import publishing
from core.errors import InvalidArguments, NotFound
from core.models import ScheduleSummary

DOMAIN = "data.x.org"
CATALOG = "/api/catalog/v1"


def schedule_path(fxf: str) -> str:
    return f"/api/publishing/v1/revision/datasets/{fxf}"


def dataset(fxf: str, name: str, kind: str = "dataset") -> dict:
    return {"resource": {"id": fxf, "name": name, "type": kind}}


DAILY = {
    "cadence": "Daily",
    "status": "active",
    "enabled": True,
    "lastRun": "2024-01-01T00:00:00Z",
    "nextRun": "2024-01-02T00:00:00Z",
    "rowCount": 10,
    "owner": "ops",
}


# -----------------------------------------------------------------------------
# summaries
# -----------------------------------------------------------------------------
def test_summary_text_for_enabled_schedule():
    assert publishing.schedule_summary_text(DAILY) == (
        "Updates daily, last updated: 2024-01-01, next update: 2024-01-02"
    )


@pytest.mark.parametrize(
    "schedule",
    [
        {"cadence": "Daily", "enabled": False},
        {"cadence": "Manual/None", "enabled": True},
        {"enabled": True},
    ],
)
def test_summary_text_for_manual_datasets(schedule):
    assert publishing.schedule_summary_text(schedule) == publishing.MANUAL_SUMMARY


def test_summary_text_without_run_dates():
    text = publishing.schedule_summary_text({"cadence": "Weekly", "enabled": True})

    assert text == "Updates weekly, last updated: Unknown, next update: Not scheduled"


def test_epoch_milliseconds_are_formatted_as_dates():
    assert publishing._format_date(1704067200000, "Unknown") == "2024-01-01"
    assert publishing._format_date(1704067200, "Unknown") == "2024-01-01"


def test_unparsable_dates_pass_through():
    assert publishing._format_date("next tuesday", "Unknown") == "next tuesday"


def test_summarize_fills_defaults():
    summary = publishing.summarize_schedule({"name": "Crimes", "fxf": "abcd-1234"})

    assert summary.dataset == {"name": "Crimes", "fxf": "abcd-1234"}
    assert summary.schedule["cadence"] == "Manual/None"
    assert summary.schedule["status"] == "Unknown"
    assert summary.schedule["enabled"] is False
    assert summary.schedule["rowCount"] == 0
    assert summary.schedule["owner"] == "Unknown"
    assert summary.summary == publishing.MANUAL_SUMMARY
    assert summary.error is None


def test_summarize_empty_payload_reports_no_schedule():
    summary = publishing.summarize_schedule(None, {"name": "A", "fxf": "aaaa-1111"})

    assert summary.schedule is None
    assert summary.error == publishing.NO_SCHEDULE_ERROR
    assert "summary" not in summary.to_dict()


# -----------------------------------------------------------------------------
# resolver
# -----------------------------------------------------------------------------
def test_requires_fxf_or_name(client, fake_socrata):
    with pytest.raises(InvalidArguments):
        publishing.resolve_schedule(client, DOMAIN)

    assert fake_socrata.calls() == []


def test_fxf_wins_and_never_searches(client, fake_socrata):
    fake_socrata.add("GET", schedule_path("abcd-1234"), dict(DAILY, name="Crimes", fxf="abcd-1234"))

    result = publishing.resolve_schedule(client, DOMAIN, fxf="abcd-1234", asset_name="Crimes")

    assert isinstance(result, ScheduleSummary)
    assert result.dataset == {"name": "Crimes", "fxf": "abcd-1234"}
    assert [call.path for call in fake_socrata.calls()] == [schedule_path("abcd-1234")]


def test_no_search_results_is_not_found(client, fake_socrata):
    fake_socrata.add("GET", CATALOG, {"results": []})

    with pytest.raises(NotFound, match="No datasets found matching name"):
        publishing.resolve_schedule(client, DOMAIN, asset_name="Nothing")


def test_non_dataset_match_names_its_type(client, fake_socrata):
    fake_socrata.add("GET", CATALOG, {"results": [dataset("ffff-0000", "Crimes map", "map")]})

    with pytest.raises(NotFound, match='"Crimes" is a map'):
        publishing.resolve_schedule(client, DOMAIN, asset_name="Crimes")

    assert len(fake_socrata.calls()) == 1


def test_single_match_is_unwrapped(client, fake_socrata):
    fake_socrata.add("GET", CATALOG, {"results": [dataset("abcd-1234", "Crimes")]})
    fake_socrata.add("GET", schedule_path("abcd-1234"), DAILY)

    result = publishing.resolve_schedule(client, DOMAIN, asset_name="Crimes")

    assert isinstance(result, ScheduleSummary)
    assert result.dataset == {"name": "Crimes", "fxf": "abcd-1234"}
    assert result.summary.startswith("Updates daily")


def test_one_failed_fetch_does_not_sink_the_rest(client, fake_socrata):
    fake_socrata.add(
        "GET",
        CATALOG,
        {
            "results": [
                dataset("aaaa-1111", "Crimes"),
                dataset("mmmm-0000", "Crimes map", "map"),
                dataset("bbbb-2222", "Crimes 2001"),
            ]
        },
    )
    fake_socrata.add("GET", schedule_path("aaaa-1111"), DAILY)
    fake_socrata.add("GET", schedule_path("bbbb-2222"), {"message": "boom"}, status=500)

    result = publishing.resolve_schedule(client, DOMAIN, asset_name="Crimes")

    assert isinstance(result, list)
    assert [item.dataset["fxf"] for item in result] == ["aaaa-1111", "bbbb-2222"]
    assert result[0].error is None
    assert result[1].schedule is None
    assert result[1].error.startswith("Unable to fetch schedule: Socrata API error (500)")


def test_domain_category_counts_as_dataset():
    assert publishing.is_dataset({"classification": {"domain_category": "dataset"}})
    assert not publishing.is_dataset({"resource": {"type": "chart"}})
    assert not publishing.is_dataset("abcd-1234")


def test_non_object_schedule_payload_falls_back_to_defaults(client, fake_socrata):
    fake_socrata.add(
        "GET",
        CATALOG,
        {"results": [dataset("aaaa-1111", "Crimes"), dataset("bbbb-2222", "Crimes 2001")]},
    )
    fake_socrata.add("GET", schedule_path("aaaa-1111"), DAILY)
    fake_socrata.add("GET", schedule_path("bbbb-2222"), [{"revision_seq": 1}])

    result = publishing.resolve_schedule(client, DOMAIN, asset_name="Crimes")

    assert len(result) == 2
    assert result[0].summary.startswith("Updates daily")
    assert result[1].dataset == {"name": "Crimes 2001", "fxf": "bbbb-2222"}
    assert result[1].schedule["cadence"] == "Manual/None"
    assert result[1].summary == publishing.MANUAL_SUMMARY
    assert result[1].error is None


def test_non_object_schedule_payload_in_direct_mode(client, fake_socrata):
    fake_socrata.add("GET", schedule_path("abcd-1234"), [{"revision_seq": 1}])

    result = publishing.resolve_schedule(client, DOMAIN, fxf="abcd-1234")

    assert result.dataset == {"name": "Unknown", "fxf": "Unknown"}
    assert result.schedule["status"] == "Unknown"
    assert result.error is None
