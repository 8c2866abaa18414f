"""Import every model so Base.metadata knows all tables."""

from .chapter.models import Chapter
from .quote.models import Quote
from .setting.models import Setting
from .source.models import Source
from .version.models import Version
from .writing_session.models import WritingSession

__all__ = ["Chapter", "Quote", "Setting", "Source", "Version", "WritingSession"]
