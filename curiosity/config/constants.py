"""Hard-coded configuration constants not meant to be user-configurable."""

DEFAULT_MAX_ITERATIONS = 10
DEFAULT_QUERY_LIMIT = 10

DEFAULT_LLM_BASE_URL = "https://api.sambanova.ai/v1"
DEFAULT_LLM_MODEL = "Meta-Llama-3.3-70B-Instruct"

# Object type used when a CRM query cannot be parsed well enough to rewrite it
DEFAULT_QUERY_OBJECT = "Lead"
RECENT_LEADS_QUERY = (
    "SELECT Id, Name, Email, Company, Status FROM Lead "
    f"ORDER BY CreatedDate DESC LIMIT {DEFAULT_QUERY_LIMIT}"
)
