import unittest
from unittest import mock

from riseup.core.models import SavedJob, SavedVideo
from riseup.core.saved_state import SavedState, SavedStateManager


class RecordingStorage:
    """In-memory storage that remembers every write."""

    def __init__(self, data=None, fail_writes=False):
        self.data = dict(data or {})
        self.writes = []
        self.fail_writes = fail_writes

    def store(self, key, value):
        self.writes.append((key, value))
        if self.fail_writes:
            return False
        self.data[key] = value
        return True

    def load(self, key):
        return self.data.get(key)

    def remove(self, key):
        self.data.pop(key, None)
        return True


def make_job(job_id="1", title="Cashier"):
    return SavedJob(
        id=job_id,
        title=title,
        company="Corner Store",
        location="Springfield",
        salary="$15/hour",
        skills=["Basic English"],
        saved_date="2024-01-01T00:00:00.000Z",
    )


def make_video(video_id="3", title="Safe Driving Tips"):
    return SavedVideo(
        id=video_id,
        title=title,
        category="Driving",
        duration="12 min",
        description="Essential safety tips for delivery drivers",
        skills_gained=["driving safety"],
        saved_date="2024-01-01T00:00:00.000Z",
    )


class SavedStateTests(unittest.TestCase):
    def setUp(self):
        self.storage = RecordingStorage()
        self.state = SavedState("user", self.storage)
        self.state.initialize()

    def test_fresh_state_is_empty(self):
        self.assertFalse(self.state.is_job_saved("42"))
        self.assertEqual(self.state.get_completed_videos_with_details(), [])
        self.assertEqual(self.storage.writes, [])

    def test_save_job_twice_keeps_one_entry(self):
        self.state.save_job(make_job("1"))
        self.state.save_job(make_job("1", title="Cashier (again)"))

        self.assertEqual([j.id for j in self.state.saved_jobs], ["1"])
        self.assertEqual(self.state.saved_jobs[0].title, "Cashier")
        self.assertEqual(len(self.storage.writes), 1)

    def test_unsave_then_query_is_false(self):
        self.state.save_job(make_job("1"))
        self.state.unsave_job("1")
        self.assertFalse(self.state.is_job_saved("1"))

        self.state.unsave_job("never-saved")
        self.assertFalse(self.state.is_job_saved("never-saved"))

    def test_save_unsave_save_leaves_one_entry(self):
        self.state.save_job(make_job("1"))
        self.state.unsave_job("1")
        self.state.save_job(make_job("1"))

        self.assertEqual([j.id for j in self.state.saved_jobs], ["1"])
        key, value = self.storage.writes[-1]
        self.assertEqual(key, "savedJobs_user")
        self.assertEqual(len(value), 1)
        self.assertEqual(value[0]["savedDate"], "2024-01-01T00:00:00.000Z")
        self.assertEqual(value[0]["kind"], "job")

    def test_video_save_and_unsave(self):
        self.state.save_video(make_video("3"))
        self.state.save_video(make_video("3"))
        self.assertTrue(self.state.is_video_saved("3"))
        self.assertEqual(len(self.state.saved_videos), 1)

        self.state.unsave_video("3")
        self.assertFalse(self.state.is_video_saved("3"))
        self.assertEqual(self.storage.data["savedVideos_user"], [])

    def test_complete_video_is_idempotent(self):
        self.state.complete_video("1")
        self.state.complete_video("1")

        self.assertEqual(self.state.completed_videos, ["1"])
        self.assertTrue(self.state.is_video_completed("1"))
        self.assertEqual(self.storage.writes, [("completedVideos_user", ["1"])])

    def test_apply_withdraw_round_trip(self):
        self.state.apply_to_job("9")
        self.state.apply_to_job("9")
        self.assertTrue(self.state.is_job_applied("9"))
        self.assertEqual(self.state.applied_jobs, ["9"])

        self.state.withdraw_job_application("9")
        self.assertFalse(self.state.is_job_applied("9"))
        self.assertEqual(self.storage.data["appliedJobs_user"], [])

    def test_withdraw_unknown_job_does_not_write(self):
        self.state.withdraw_job_application("missing")
        self.assertEqual(self.storage.writes, [])

    def test_completed_details_follow_catalog_order(self):
        self.state.complete_video("2")
        self.state.complete_video("1")
        self.state.complete_video("99")

        details = self.state.get_completed_videos_with_details()
        self.assertEqual([v.id for v in details], ["1", "2"])
        self.assertEqual(details[0].title, "Customer Service Basics")
        self.assertEqual(details[1].title, "Cash Handling Safety")
        self.assertIsNot(details, self.state.get_completed_videos_with_details())

    def test_toggle_saved_job(self):
        self.assertTrue(self.state.toggle_saved_job(make_job("5")))
        self.assertTrue(self.state.is_job_saved("5"))
        self.assertFalse(self.state.toggle_saved_job(make_job("5")))
        self.assertFalse(self.state.is_job_saved("5"))

    def test_toggle_saved_video(self):
        self.assertTrue(self.state.toggle_saved_video(make_video("4")))
        self.assertFalse(self.state.toggle_saved_video(make_video("4")))
        self.assertEqual(self.state.saved_videos, [])

    def test_drop_job_withdraws_and_unsaves(self):
        self.state.save_job(make_job("7"))
        self.state.apply_to_job("7")

        self.state.drop_job("7")

        self.assertFalse(self.state.is_job_saved("7"))
        self.assertFalse(self.state.is_job_applied("7"))

    def test_collections_are_copies(self):
        self.state.apply_to_job("1")
        applied = self.state.applied_jobs
        applied.append("2")
        self.assertEqual(self.state.applied_jobs, ["1"])

    def test_failed_write_keeps_memory_state(self):
        storage = RecordingStorage(fail_writes=True)
        state = SavedState("user", storage)
        state.initialize()

        with self.assertLogs("riseup.core.saved_state", level="WARNING"):
            state.apply_to_job("3")

        self.assertTrue(state.is_job_applied("3"))
        self.assertEqual(len(storage.writes), 1)
        self.assertNotIn("appliedJobs_user", storage.data)
        self.assertEqual(state.dropped_writes, 1)

    def test_commit_writes_only_the_changed_collection(self):
        self.state.save_job(make_job("1"))
        self.state.complete_video("1")

        with mock.patch.object(self.state, "snapshot") as snapshot:
            self.state.apply_to_job("9")
        snapshot.assert_not_called()

        self.assertEqual(self.storage.writes[-1], ("appliedJobs_user", ["9"]))
        self.assertEqual(self.state.dropped_writes, 0)
        self.assertEqual(
            self.state.snapshot(),
            {
                "savedJobs": [make_job("1").model_dump(by_alias=True)],
                "savedVideos": [],
                "completedVideos": ["1"],
                "appliedJobs": ["9"],
            },
        )


class InitializationTests(unittest.TestCase):
    def test_mutations_before_initialize_do_not_write(self):
        storage = RecordingStorage({"appliedJobs_user": ["1", "2"]})
        state = SavedState("user", storage)

        state.apply_to_job("3")
        self.assertEqual(storage.writes, [])

        state.initialize()
        self.assertEqual(state.applied_jobs, ["1", "2"])
        self.assertEqual(storage.data["appliedJobs_user"], ["1", "2"])

    def test_initialize_loads_persisted_collections(self):
        storage = RecordingStorage(
            {
                "savedJobs_user": [make_job("1").model_dump(by_alias=True)],
                "savedVideos_user": [make_video("3").model_dump(by_alias=True)],
                "completedVideos_user": ["1", "2"],
                "appliedJobs_user": ["1"],
            }
        )
        state = SavedState("user", storage)
        state.initialize()

        self.assertTrue(state.initialized)
        self.assertTrue(state.is_job_saved("1"))
        self.assertTrue(state.is_video_saved("3"))
        self.assertEqual(state.completed_videos, ["1", "2"])
        self.assertTrue(state.is_job_applied("1"))

    def test_legacy_type_tag_is_accepted(self):
        legacy = make_job("1").model_dump(by_alias=True)
        legacy["type"] = legacy.pop("kind")
        storage = RecordingStorage({"savedJobs_user": [legacy]})

        state = SavedState("user", storage)
        state.initialize()

        self.assertTrue(state.is_job_saved("1"))
        self.assertEqual(state.saved_jobs[0].kind, "job")

    def test_malformed_persisted_data_is_skipped(self):
        storage = RecordingStorage(
            {
                "savedJobs_user": [{"title": "no id"}, make_job("2").model_dump(by_alias=True)],
                "savedVideos_user": {"not": "a list"},
                "completedVideos_user": ["1", None, "1"],
                "appliedJobs_user": "oops",
            }
        )
        state = SavedState("user", storage)
        with self.assertLogs("riseup.core.saved_state", level="WARNING"):
            state.initialize()

        self.assertEqual([j.id for j in state.saved_jobs], ["2"])
        self.assertEqual(state.saved_videos, [])
        self.assertEqual(state.completed_videos, ["1"])
        self.assertEqual(state.applied_jobs, [])

    def test_invalid_role_is_rejected(self):
        with self.assertRaises(ValueError):
            SavedState("admin", RecordingStorage())


class ManagerTests(unittest.TestCase):
    def setUp(self):
        self.storage = RecordingStorage(
            {
                "appliedJobs_employer": ["e1"],
                "completedVideos_employer": ["8"],
            }
        )
        self.manager = SavedStateManager(self.storage)

    def test_role_switch_shows_only_new_context(self):
        self.manager.save_job("user", make_job("1"))
        self.manager.apply_to_job("user", "u1")
        self.manager.complete_video("user", "1")

        self.assertFalse(self.manager.is_job_saved("employer", "1"))
        self.assertFalse(self.manager.is_job_applied("employer", "u1"))
        self.assertTrue(self.manager.is_job_applied("employer", "e1"))
        self.assertEqual(
            [v.id for v in self.manager.get_completed_videos_with_details("employer")], ["8"]
        )
        self.assertEqual(self.manager.active_role, "employer")

        # Switching back reloads what the user context persisted
        self.assertTrue(self.manager.is_job_saved("user", "1"))
        self.assertTrue(self.manager.is_job_applied("user", "u1"))
        self.assertEqual(self.storage.data["completedVideos_employer"], ["8"])

    def test_writes_are_scoped_to_role(self):
        self.manager.apply_to_job("employer", "e2")
        self.assertEqual(self.storage.data["appliedJobs_employer"], ["e1", "e2"])
        self.assertNotIn("appliedJobs_user", self.storage.data)

    def test_context_is_reused_for_same_role(self):
        first = self.manager.context("user")
        self.assertIs(self.manager.context("user"), first)

    def test_clear_removes_role_data(self):
        self.manager.context("employer")
        self.manager.clear("employer")

        self.assertIsNone(self.manager.active_role)
        self.assertNotIn("appliedJobs_employer", self.storage.data)
        self.assertFalse(self.manager.is_job_applied("employer", "e1"))

    def test_clear_reports_failed_removal(self):
        self.storage.remove = lambda key: key != "savedJobs_user"
        self.assertFalse(self.manager.clear("user"))
        self.assertTrue(self.manager.clear("employer"))

    def test_video_and_toggle_delegation(self):
        self.manager.save_video("user", make_video("5"))
        self.assertTrue(self.manager.is_video_saved("user", "5"))
        self.manager.unsave_video("user", "5")
        self.assertFalse(self.manager.is_video_saved("user", "5"))

        self.assertTrue(self.manager.toggle_saved_job("user", make_job("6")))
        self.assertTrue(self.manager.toggle_saved_video("user", make_video("6")))
        self.manager.drop_job("user", "6")
        self.assertFalse(self.manager.is_job_saved("user", "6"))
        self.manager.withdraw_job_application("user", "nothing")
        self.assertTrue(self.manager.is_video_completed("employer", "8"))


if __name__ == "__main__":
    unittest.main()
