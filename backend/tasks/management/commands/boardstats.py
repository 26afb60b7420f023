import json

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from tasks.board import Board


class Command(BaseCommand):
    help = "Print task totals and the completion rate."

    def add_arguments(self, parser):
        parser.add_argument("--project", help="Also report the number of tasks in this project.")
        parser.add_argument("--json", action="store_true", help="Print the figures as a JSON object.")

    def handle(self, *args, **options):
        board = Board(apps.get_app_config("tasks").repository)
        stats = board.analytics()

        project = options.get("project")
        project_count = None
        if project:
            try:
                board.switch_project(project)
            except ValueError as exc:
                raise CommandError(str(exc))
            project_count = len(board.visible_tasks())

        if options.get("json"):
            data = stats.to_dict()
            if project:
                data["project"] = {"name": project, "tasks": project_count}
            self.stdout.write(json.dumps(data))
            return

        self.stdout.write(f"Total: {stats.total}")
        self.stdout.write(f"Done: {stats.done}")
        self.stdout.write(f"Pending: {stats.pending}")
        self.stdout.write(f"Completion: {stats.rate_label}")
        if project:
            self.stdout.write(f"{project}: {project_count} tasks")
