import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from tasks.board import Board, InvalidDocument


class Command(BaseCommand):
    help = "Replace all tasks with the contents of a {tasks, projects} JSON document."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Board document to import.")

    def handle(self, *args, **options):
        path = options["path"]
        try:
            with open(path, encoding="utf-8") as fh:
                doc = json.load(fh)
        except OSError as exc:
            raise CommandError(f"Could not read {path}: {exc}")
        except ValueError:
            raise CommandError("Invalid JSON file")

        board = Board(apps.get_app_config("tasks").repository)
        try:
            count = board.import_document(doc)
        except InvalidDocument as exc:
            raise CommandError(f"Invalid board document: {exc}")
        self.stdout.write(self.style.SUCCESS(
            f"Imported {count} tasks across {len(board.projects)} projects"
        ))
