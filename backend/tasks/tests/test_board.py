import json

from django.test import SimpleTestCase

from tasks.board import Board, InvalidDocument
from tasks.repository import TaskNotFound

from .utils import TempRepositoryMixin


class BoardTests(TempRepositoryMixin, SimpleTestCase):
    def setUp(self):
        self.repo = self.make_repository()
        self.board = Board(self.repo)

    def test_starts_with_inbox(self):
        self.assertEqual(self.board.projects, ["Inbox"])
        self.assertEqual(self.board.current_project, "Inbox")

    def test_projects_are_picked_up_from_stored_tasks(self):
        self.repo.create({"title": "a", "project": "Work"})
        self.repo.create({"title": "b", "project": "Home"})
        board = Board(self.repo, projects=["Personal"])
        self.assertEqual(board.projects, ["Inbox", "Personal", "Work", "Home"])

    def test_blank_title_is_a_no_op(self):
        self.assertIsNone(self.board.add_task("   "))
        self.assertEqual(len(self.repo), 0)

    def test_add_task_uses_current_project(self):
        self.board.add_project("Work")
        self.board.switch_project("Work")
        task = self.board.add_task("  Ship it ", priority=3, due="2026-03-01")
        self.assertEqual(task.title, "Ship it")
        self.assertEqual(task.project, "Work")
        self.assertEqual(task.priority, 3)
        self.assertFalse(task.done)
        self.assertEqual([t.id for t in self.board.visible_tasks()], [task.id])

    def test_add_project_rejects_blank_and_duplicates(self):
        with self.assertRaises(ValueError):
            self.board.add_project("")
        self.board.add_project("Work")
        with self.assertRaises(ValueError):
            self.board.add_project("Work")
        self.assertEqual(self.board.projects, ["Inbox", "Work"])

    def test_switch_to_unknown_project_fails(self):
        with self.assertRaises(ValueError):
            self.board.switch_project("Nowhere")

    def test_edit_only_touches_title_priority_due(self):
        task = self.board.add_task("Draft", priority=1)
        self.board.toggle_done(task.id)
        edited = self.board.edit_task(task.id, "Final", 2, "2026-05-05")
        self.assertEqual((edited.title, edited.priority, edited.due), ("Final", 2, "2026-05-05"))
        self.assertTrue(edited.done)
        self.assertEqual(edited.project, "Inbox")

    def test_toggle_flips_done(self):
        task = self.board.add_task("Flip")
        self.assertTrue(self.board.toggle_done(task.id).done)
        self.assertFalse(self.board.toggle_done(task.id).done)

    def test_unknown_id_raises(self):
        with self.assertRaises(TaskNotFound):
            self.board.toggle_done("missing")
        with self.assertRaises(TaskNotFound):
            self.board.delete_task("missing")

    def test_clear_only_removes_current_project(self):
        self.board.add_task("inbox one")
        self.board.add_project("Work")
        self.board.switch_project("Work")
        self.board.add_task("work one")
        self.board.add_task("work two")

        self.assertEqual(self.board.clear_project(), 2)
        self.assertEqual([t.title for t in self.repo.list_tasks()], ["inbox one"])

    def test_analytics_cover_every_project(self):
        self.assertEqual(self.board.analytics().rate_label, "0%")
        first = self.board.add_task("one")
        self.board.add_project("Work")
        self.board.switch_project("Work")
        self.board.add_task("two")
        self.board.toggle_done(first.id)

        stats = self.board.analytics()
        self.assertEqual((stats.total, stats.done, stats.pending), (2, 1, 1))
        self.assertEqual(stats.rate_label, "50%")


class BoardDocumentTests(TempRepositoryMixin, SimpleTestCase):
    def setUp(self):
        self.repo = self.make_repository()
        self.board = Board(self.repo)
        self.board.add_project("Work")
        self.board.add_task("inbox task", priority=2)
        self.board.switch_project("Work")
        done = self.board.add_task("work task", due="2026-04-04")
        self.board.toggle_done(done.id)

    def test_export_then_import_is_idempotent(self):
        exported = self.board.export_document()
        # through a JSON file, the way a user would move it around
        doc = json.loads(json.dumps(exported))

        other = Board(self.make_repository())
        other.import_document(doc)
        self.assertEqual(other.export_document(), exported)

    def test_import_without_projects_keeps_current_ones(self):
        self.board.add_project("Someday")
        self.board.import_document({"tasks": [{"id": "n1", "title": "new", "project": "Work"}]})
        self.assertEqual(self.board.projects, ["Inbox", "Work", "Someday"])
        self.assertEqual([t.id for t in self.repo.list_tasks()], ["n1"])

    def test_import_replaces_projects_when_given(self):
        self.board.import_document({"tasks": [], "projects": ["Inbox", "Garden"]})
        self.assertEqual(self.board.projects, ["Inbox", "Garden"])
        self.assertEqual(self.board.current_project, "Inbox")
        self.assertEqual(len(self.repo), 0)

    def test_malformed_documents_change_nothing(self):
        before = self.board.export_document()
        bad_docs = [
            [1, 2, 3],
            "text",
            {"tasks": "nope"},
            {"tasks": [1]},
            {"tasks": [], "projects": "Work"},
            {"tasks": [{"title": "  "}]},
            {"tasks": [{"id": "d", "title": "a"}, {"id": "d", "title": "b"}]},
        ]
        for doc in bad_docs:
            with self.subTest(doc=doc):
                with self.assertRaises(InvalidDocument):
                    self.board.import_document(doc)
                self.assertEqual(self.board.export_document(), before)
