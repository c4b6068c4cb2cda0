from django.apps import AppConfig
from django.conf import settings
from django.core.checks import Tags, Warning, register


class RestoraConfig(AppConfig):
    name = "restora"

    def ready(self) -> None:
        @register(Tags.compatibility)
        def _check_agent_configuration(app_configs, **kwargs):
            """
            Warn early when the restoration agent cannot be reached with the current settings.
            """
            issues = []
            if not getattr(settings, "RESTORA_AGENT_API_KEY", ""):
                issues.append(
                    Warning(
                        "RESTORA_AGENT_API_KEY is not set; uploads and restorations will be rejected.",
                        hint="Set RESTORA_AGENT_API_KEY in the environment or a .env file.",
                        id="restora.W001",
                    )
                )
            if not getattr(settings, "RESTORA_AGENT_ID", ""):
                issues.append(
                    Warning(
                        "RESTORA_AGENT_ID is not set; there is no agent to invoke.",
                        hint="Set RESTORA_AGENT_ID in the environment or a .env file.",
                        id="restora.W002",
                    )
                )
            return issues
