from curiosity.prompts.sales import UserProfile, build_system_prompt
from curiosity.tools.core.types import IntegrationFlags


def test_no_integrations():
    prompt = build_system_prompt(IntegrationFlags(web=False))

    assert prompt.startswith("You are Curiosity Engine")
    assert "No CRM or email integrations are connected" in prompt
    assert "Salesforce CRM is connected" not in prompt
    assert "Web search" not in prompt


def test_only_connected_integrations_described():
    prompt = build_system_prompt(IntegrationFlags(salesforce=True, gmail=True))

    assert "Salesforce CRM is connected" in prompt
    assert "Gmail and Google Calendar are connected" in prompt
    assert "Outlook is connected" not in prompt
    assert "Monday.com" not in prompt
    assert "No CRM or email integrations" not in prompt
    assert "Web search and page browsing are available" in prompt


def test_profile_and_context():
    profile = UserProfile(full_name="Sam Seller", company_name="Acme")

    prompt = build_system_prompt(
        IntegrationFlags(), profile, {"timezone": "Europe/Zürich"}
    )

    assert "- Name: Sam Seller" in prompt
    assert "- Role: Not set" in prompt
    assert "- Company: Acme" in prompt
    assert '"timezone": "Europe/Zürich"' in prompt


def test_guidelines_always_present():
    assert "never call a tool with empty arguments" in build_system_prompt(IntegrationFlags())
