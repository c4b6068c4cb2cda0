"""Django management command that runs one restoration job from the terminal.

The command validates and uploads the given file, invokes the restoration
agent with the selected presets and reports progress as it goes. A successful
restoration is appended to the persisted history.
"""

import asyncio
import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from restora.helpers import download_name, format_file_size
from restora.models import Phase, Preset, SourceFile
from restora.tasks import RestorationWorkflow


class Command(BaseCommand):
    """Restore a single photo and record it in the history."""

    help = "Restore a photo with the remote restoration agent"

    def add_arguments(self, parser):
        parser.add_argument("path", help="Path to a JPG, PNG or WEBP image")
        parser.add_argument(
            "--preset",
            action="append",
            default=[],
            choices=[preset.value for preset in Preset],
            help="Enhancement preset to apply (repeatable)",
        )
        parser.add_argument("--agent-id", default=None, help="Override RESTORA_AGENT_ID")

    def handle(self, *args, **options):
        path = Path(options["path"])
        if not path.is_file():
            raise CommandError(f"File not found: {path}")

        workflow = RestorationWorkflow(agent_id=options["agent_id"])
        workflow.set_presets(options["preset"])

        last_progress = {"value": None}

        def report(job):
            if job.phase == Phase.RESTORING and job.progress != last_progress["value"]:
                last_progress["value"] = job.progress
                self.stdout.write(f"Restoring... {job.progress}%")

        workflow.subscribe(report)
        source_file = SourceFile.from_path(path)

        async def run():
            phase = await workflow.select_file(source_file)
            if phase != Phase.READY:
                return phase
            self.stdout.write(
                f"Uploaded {source_file.name} ({format_file_size(source_file.size)})"
            )
            return await workflow.restore()

        phase = asyncio.run(run())

        if phase != Phase.COMPLETED:
            notice = workflow.error
            payload = notice.as_dict() if notice else {"phase": phase.value}
            self.stderr.write(json.dumps(payload, indent=2))
            raise CommandError(notice.message if notice else f"Restoration ended in {phase.value}")

        outcome = workflow.job.outcome
        self.stdout.write(self.style.SUCCESS(f"Restored image: {outcome.restored_url}"))
        self.stdout.write(f"Save as: {download_name(source_file.name)}")
        if outcome.analysis_text:
            self.stdout.write("")
            self.stdout.write(outcome.analysis_text)
        self.stdout.write(f"Status: {outcome.status}")
