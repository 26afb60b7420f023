import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from tasks.board import Board


class Command(BaseCommand):
    help = "Write every task and project as a {tasks, projects} JSON document."

    def add_arguments(self, parser):
        parser.add_argument("path", nargs="?", help="Output file (defaults to stdout).")

    def handle(self, *args, **options):
        board = Board(apps.get_app_config("tasks").repository)
        doc = json.dumps(board.export_document(), indent=2, ensure_ascii=False)
        path = options.get("path")
        if not path:
            self.stdout.write(doc)
            return
        try:
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(doc)
        except OSError as exc:
            raise CommandError(f"Could not write {path}: {exc}")
        self.stdout.write(self.style.SUCCESS(f"Exported {len(board.repository)} tasks to {path}"))
