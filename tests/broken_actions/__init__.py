"""Package whose import fails, as with a missing third-party dependency."""

import actiondoc_missing_dependency  # noqa: F401
