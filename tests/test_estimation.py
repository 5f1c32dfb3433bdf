import threading

from agrosmart.estimation import HarvestDateEstimator


def test_short_name_does_not_request():
    calls = []
    est = HarvestDateEstimator(lambda *args: calls.append(args) or "2024-04-30", debounce_seconds=0)
    est.inputs_changed("Wh", "2024-01-01")
    assert not est.pending
    assert est.wait(timeout=1)
    assert calls == []
    assert not est.ready


def test_estimate_lands_after_debounce():
    seen = []

    def estimate(name, sowing, location):
        seen.append((name, sowing, location))
        return "2024-04-30"

    est = HarvestDateEstimator(estimate, debounce_seconds=0, default_location="India")
    est.inputs_changed(" Wheat ", "2024-01-01")
    assert est.wait(timeout=5)
    assert est.harvest_date == "2024-04-30"
    assert est.ready
    assert seen == [("Wheat", "2024-01-01", "India")]


def test_stale_result_is_discarded():
    release_first = threading.Event()
    first_started = threading.Event()

    def estimate(name, sowing, location):
        if name == "Wheat":
            first_started.set()
            release_first.wait(5)
            return "2024-04-30"
        return "2024-05-10"

    est = HarvestDateEstimator(estimate, debounce_seconds=0)
    first = est.inputs_changed("Wheat", "2024-01-01")
    assert first_started.wait(5)

    est.inputs_changed("Rice", "2024-01-01")
    assert est.wait(timeout=5)
    assert est.harvest_date == "2024-05-10"

    release_first.set()
    # the late Wheat answer must not overwrite the newer one
    assert est.commit(first, "2024-04-30") is False
    assert est.harvest_date == "2024-05-10"


def test_rapid_edits_only_estimate_last_input():
    seen = []
    done = threading.Event()

    def estimate(name, sowing, location):
        seen.append(name)
        done.set()
        return "2024-04-30"

    est = HarvestDateEstimator(estimate, debounce_seconds=0.2)
    for partial in ("Whe", "Whea", "Wheat"):
        est.inputs_changed(partial, "2024-01-01")
    assert est.wait(timeout=5)
    assert done.wait(1)
    assert seen == ["Wheat"]


def test_clearing_name_clears_date():
    est = HarvestDateEstimator(lambda *a: "2024-04-30", debounce_seconds=0)
    est.inputs_changed("Wheat", "2024-01-01")
    est.wait(timeout=5)

    est.inputs_changed("Wh", "2024-01-01")
    assert est.harvest_date == "2024-04-30"

    est.inputs_changed("", "2024-01-01")
    assert est.harvest_date == ""
    assert not est.ready


def test_pending_blocks_ready():
    gate = threading.Event()
    est = HarvestDateEstimator(lambda *a: gate.wait(5) and "2024-05-01", debounce_seconds=0)
    est.set_harvest_date("2024-04-30")
    assert est.ready

    est.inputs_changed("Wheat", "2024-02-01")
    assert est.pending
    assert not est.ready

    gate.set()
    assert est.wait(timeout=5)
    assert est.harvest_date == "2024-05-01"


def test_failing_estimate_uses_local_table():
    def boom(*args):
        raise RuntimeError("nope")

    est = HarvestDateEstimator(boom, debounce_seconds=0)
    est.inputs_changed("Wheat", "2024-01-01")
    assert est.wait(timeout=5)
    assert est.harvest_date == "2024-04-30"
    assert est.ready


def test_failing_estimate_with_bad_sowing_date_commits_empty():
    def boom(*args):
        raise RuntimeError("nope")

    est = HarvestDateEstimator(boom, debounce_seconds=0)
    est.inputs_changed("Wheat", "sometime")
    assert est.wait(timeout=5)
    assert est.harvest_date == ""
    assert not est.pending


def test_manual_date_invalidates_in_flight_estimate():
    gate = threading.Event()
    est = HarvestDateEstimator(lambda *a: gate.wait(5) and "2024-04-30", debounce_seconds=0)
    gen = est.inputs_changed("Wheat", "2024-01-01")
    est.set_harvest_date("")
    assert not est.pending
    gate.set()
    assert est.commit(gen, "2024-04-30") is False
    assert est.harvest_date == ""
