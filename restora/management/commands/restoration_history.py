from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_datetime

from restora.helpers import format_file_size
from restora.services import HistoryStore


def _format_date(timestamp: str) -> str:
    try:
        parsed = parse_datetime(timestamp)
    except ValueError:
        parsed = None
    return parsed.strftime("%b %d, %Y") if parsed else timestamp


class Command(BaseCommand):
    """List or delete saved restorations."""

    help = "Show the restoration history"

    def add_arguments(self, parser):
        parser.add_argument("--search", default="", help="Filter by file name")
        parser.add_argument("--oldest", action="store_true", help="Oldest first")
        parser.add_argument("--delete", metavar="ID", default=None, help="Delete one entry")

    def handle(self, *args, **options):
        history = HistoryStore()
        history.load()

        if options["delete"]:
            if not history.remove(options["delete"]):
                raise CommandError(f"No restoration with id {options['delete']}")
            self.stdout.write(self.style.SUCCESS(f"Deleted restoration {options['delete']}"))
            return

        entries = history.search(options["search"], newest_first=not options["oldest"])
        if not entries:
            if options["search"]:
                self.stdout.write("No restorations match your search.")
            else:
                self.stdout.write("No restorations yet. Start by restoring a photo!")
            return

        for entry in entries:
            line = (
                f"{entry.id}  {entry.file_name}  {_format_date(entry.timestamp)}"
                f"  {format_file_size(entry.file_size_bytes)}"
            )
            if entry.presets:
                line += f"  [{', '.join(entry.presets)}]"
            self.stdout.write(line)
            self.stdout.write(f"    {entry.restored_ref}")
