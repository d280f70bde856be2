"""Domain modules package."""

from app.modules.field_templates import models as field_templates_models  # noqa: F401
from app.modules.profile_fields import models as profile_fields_models  # noqa: F401
from app.modules.troves import models as troves_models  # noqa: F401
from app.modules.users import models as users_models  # noqa: F401
from app.modules.weapons import models as weapons_models  # noqa: F401
