import pytest

from ibomscope import theme
from ibomscope.inspection_wizard import InspectionWizard, Step


@pytest.fixture
def wizard():
    return InspectionWizard(["C1", "R1", "U1"])


def test_initial_state(wizard):
    assert wizard.step is Step.SELECT_COMPONENTS
    assert wizard.next_label() == "Next >"
    assert wizard.back_enabled() is False
    assert wizard.next_enabled() is True


def test_next_needs_selection(wizard):
    assert wizard.next() is Step.SELECT_COMPONENTS
    wizard.select(["U1", "C1"])
    assert wizard.selected == ["C1", "U1"]
    assert wizard.next() is Step.ALIGNMENT
    assert wizard.next_label() == "Start Inspection >"


def test_select_unknown_raises(wizard):
    with pytest.raises(ValueError):
        wizard.select(["Q7"])
    assert wizard.selected == []


def test_alignment_starts_inspection(wizard):
    started = []
    wizard.inspection_started.connect(started.append)
    wizard.select(["R1"])
    wizard.next()
    assert wizard.next() is Step.INSPECTION
    assert started == [["R1"]]
    assert wizard.next_enabled() is False
    assert wizard.next_label() == "Inspecting..."
    assert wizard.next() is Step.INSPECTION


def test_results_finish(wizard):
    finished = []
    wizard.inspection_finished.connect(lambda: finished.append(True))
    wizard.set_step(Step.RESULTS)
    assert wizard.next_enabled() is True
    assert wizard.next_label() == "Finish"
    wizard.next()
    assert finished == [True]
    assert wizard.accepted is True


def test_back(wizard):
    wizard.set_step(Step.ALIGNMENT)
    assert wizard.back() is Step.SELECT_COMPONENTS
    assert wizard.back() is Step.SELECT_COMPONENTS


def test_cancel(wizard):
    cancelled = []
    wizard.inspection_cancelled.connect(lambda: cancelled.append(1))
    wizard.cancel()
    assert cancelled == [1]
    assert wizard.accepted is False


def test_results_and_progress(wizard):
    ok = wizard.add_result("C1", "OK", "fine")
    missing = wizard.add_result("R1", "Missing")
    other = wizard.add_result("U1", "Unknown")
    assert ok.color == theme.PLACED
    assert missing.color == theme.MISSING
    assert other.color is None
    assert [r.reference for r in wizard.results] == ["C1", "R1", "U1"]
    wizard.set_progress(2, 5)
    assert wizard.progress_text == "Inspecting 2 of 5"
    assert (wizard.progress_value, wizard.progress_maximum) == (2, 5)