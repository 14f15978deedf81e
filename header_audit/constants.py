"""Constants for header-audit."""

# Exit codes
EXIT_SUCCESS = 0  # Audit passed (or failure reported without fail-on-error)
EXIT_ISSUES = 1  # Unapproved licenses found with fail-on-error
EXIT_ERROR = 2  # Audit could not run (configuration or rendering error)

# Report file names are relied upon by downstream tooling, keep them stable
AUDIT_NAME = "rat"
STRUCTURED_REPORT_NAME = f"{AUDIT_NAME}-report.xml"
PLAIN_REPORT_NAME = f"{AUDIT_NAME}-report.txt"
STYLED_REPORT_NAME = "index.html"

DEFAULT_REPORT_DIR = "build/reports/rat"

# Number of leading lines kept as a header sample for unknown files
HEADER_SAMPLE_LINES = 10

# Upper bound on concurrent file reads
MAX_CONCURRENT_READS = 32

LEGAL_DISCLAIMER = (
    "This report lists license headers matched against configured rules. "
    "It does not constitute legal advice."
)
