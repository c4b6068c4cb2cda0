from django.core import checks
from django.core.checks import Tags
from django.test import SimpleTestCase, override_settings


def _restora_ids():
    return {
        message.id
        for message in checks.run_checks(tags=[Tags.compatibility])
        if message.id and message.id.startswith("restora.")
    }


class AgentConfigurationCheckTest(SimpleTestCase):
    @override_settings(RESTORA_AGENT_API_KEY="", RESTORA_AGENT_ID="")
    def test_missing_configuration_warns(self):
        self.assertEqual(_restora_ids(), {"restora.W001", "restora.W002"})

    @override_settings(RESTORA_AGENT_API_KEY="secret", RESTORA_AGENT_ID="agent-1")
    def test_complete_configuration_is_silent(self):
        self.assertEqual(_restora_ids(), set())
