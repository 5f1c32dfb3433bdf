import pytest

from agrosmart.advisory import AdvisoryGateway
from agrosmart.estimation import HarvestDateEstimator
from agrosmart.forms import CropForm, submit_crop
from agrosmart.models import CropStatus
from agrosmart.store import InMemoryCropRepository, JsonFileCropRepository

from conftest import FakeAdvisor


def valid_form(**overrides):
    values = dict(name="Wheat", area="2.5", location="Pune", sowing_date="2024-01-01", expected_harvest_date="2024-04-30")
    values.update(overrides)
    return CropForm(**values)


def test_valid_form_has_no_errors():
    assert valid_form().errors() == []


@pytest.mark.parametrize("overrides, message", [
    ({"name": "  "}, "Crop name is required."),
    ({"location": ""}, "Location is required."),
    ({"area": "two"}, "Area must be a number (acres)."),
    ({"area": 0}, "Area must be greater than zero."),
    ({"area": "-1"}, "Area must be greater than zero."),
    ({"sowing_date": ""}, "Sowing date is required."),
    ({"sowing_date": "1 Jan"}, "Sowing date must be YYYY-MM-DD."),
    ({"expected_harvest_date": ""}, "Harvest date is still being calculated."),
])
def test_form_errors(overrides, message):
    assert message in valid_form(**overrides).errors()


def test_dates_are_not_compared():
    assert valid_form(expected_harvest_date="2023-01-01").errors() == []


def test_invalid_form_writes_nothing():
    repo = InMemoryCropRepository()
    with pytest.raises(ValueError):
        submit_crop(valid_form(name=""), repo)
    assert repo.load_all() == []


def test_submit_trims_and_stores():
    repo = InMemoryCropRepository()
    crop = submit_crop(valid_form(name=" Wheat ", variety="", notes="  "), repo)
    assert crop.name == "Wheat"
    assert crop.variety is None
    assert crop.notes is None
    assert crop.area == 2.5
    assert repo.find_by_id(crop.id) == crop


def test_add_crop_with_model_down(tmp_path):
    """Model unreachable: the local table supplies the date and the save goes through."""
    gateway = AdvisoryGateway(FakeAdvisor(responses=["unused"], structured={"HarvestEstimate": ConnectionError("down")}))
    estimator = HarvestDateEstimator(gateway.estimate_harvest_date, debounce_seconds=0)
    repo = JsonFileCropRepository(str(tmp_path / "store.json"))

    estimator.inputs_changed("Wheat", "2024-01-01", "Pune")
    assert estimator.wait(timeout=5)
    assert estimator.harvest_date == "2024-04-30"
    assert estimator.ready

    form = valid_form(expected_harvest_date=estimator.harvest_date)
    crop = submit_crop(form, repo)

    stored = repo.load_all()
    assert len(stored) == 1
    assert stored[0] == crop
    assert stored[0].status is CropStatus.GROWING
    assert stored[0].expected_harvest_date == "2024-04-30"
