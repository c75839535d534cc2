"""
Record codecs - lenient decoding of persisted JSON into entity models.
"""

from unittest.mock import patch

from zervos.core.codecs import (
    decode_company,
    decode_onboarding,
    decode_selected_id,
    decode_session,
    decode_workspaces,
    encode_onboarding,
    encode_selected_id,
    encode_session,
    encode_workspaces,
)
from zervos.core.schema import OnboardingState, TeamSession, WorkspaceStatus


class TestWorkspaceCodec:

    def test_encode_uses_persisted_field_names(self, workspace_factory):
        record = encode_workspaces([workspace_factory("w1", status="Inactive")])[0]

        assert record["bookingLink"] == "http://localhost:5000/book/w1"
        assert record["maxDigits"] == 4
        assert record["status"] == "Inactive"
        assert "booking_link" not in record

    def test_decode_clean_list(self, workspace_factory):
        records = encode_workspaces([workspace_factory("w1"), workspace_factory("w2")])

        decoded = decode_workspaces(records)

        assert decoded.ok
        assert [ws.id for ws in decoded.value] == ["w1", "w2"]
        assert decoded.value[0].status == WorkspaceStatus.ACTIVE

    def test_decode_non_list(self):
        decoded = decode_workspaces({"id": "w1"})
        assert decoded.value == []
        assert not decoded.ok

    def test_decode_bad_status_dropped(self, workspace_factory):
        good = workspace_factory("w1").to_record()
        bad = dict(good, id="w2", status="Paused")

        decoded = decode_workspaces([good, bad])

        assert [ws.id for ws in decoded.value] == ["w1"]
        assert len(decoded.errors) == 1

    def test_decode_duplicate_ids(self, workspace_factory):
        record = workspace_factory("w1").to_record()
        decoded = decode_workspaces([record, record])

        assert len(decoded.value) == 1
        assert "duplicate" in decoded.errors[0]

    @patch('zervos.core.codecs.logger')
    def test_problems_logged(self, mock_logger):
        decode_workspaces("nope")
        mock_logger.log_decode_issues.assert_called_once()


class TestSelectedIdCodec:

    def test_round_trip(self, workspace_factory):
        assert decode_selected_id(encode_selected_id(workspace_factory("w1"))).value == "w1"
        assert encode_selected_id(None) is None

    def test_unusable_values(self):
        assert decode_selected_id("").value is None
        assert decode_selected_id(["w1"]).value is None
        assert decode_selected_id(True).value is None
        assert decode_selected_id(None).ok


class TestSessionCodec:

    def test_encode(self):
        session = TeamSession(id="m1", name="A", email="a@x.test", role="Admin")
        assert encode_session(session) == {"id": "m1", "name": "A", "email": "a@x.test", "role": "Admin"}

    def test_decode_non_object(self):
        assert decode_session("m1").value is None
        assert decode_session([]).value is None

    def test_decode_numeric_id(self):
        assert decode_session({"id": 17}).value.id == "17"

    def test_decode_blank_id(self):
        decoded = decode_session({"id": "  ", "name": "A"})
        assert decoded.value is None
        assert not decoded.ok


class TestCompanyCodec:

    def test_decode_partial(self):
        company = decode_company({"name": "Acme", "plan": "pro"}).value
        assert company.name == "Acme"
        assert company.industry is None

    def test_decode_non_object(self):
        assert decode_company("Acme").value is None


class TestOnboardingCodec:

    def test_encode_uses_string_step_keys(self):
        state = OnboardingState(current_step=2, step_data={2: {"x": 1}, 1: {"y": 2}})

        assert encode_onboarding(state) == {
            "currentStep": 2,
            "highestStep": 2,
            "stepData": {"1": {"y": 2}, "2": {"x": 1}},
        }

    def test_decode_repairs_highest_step(self):
        state = decode_onboarding({"currentStep": 3, "highestStep": 1}).value
        assert state.current_step == 3
        assert state.highest_step == 3

    def test_decode_missing_highest_step(self):
        state = decode_onboarding({"currentStep": 2, "stepData": {}}).value
        assert state.highest_step == 2

    def test_decode_bad_step_data(self):
        decoded = decode_onboarding({"currentStep": 2, "stepData": [1, 2]})
        assert decoded.value.step_data == {}
        assert not decoded.ok

    def test_decode_absent(self):
        decoded = decode_onboarding(None)
        assert decoded.ok
        assert decoded.value.current_step == 1
