# import models so SQLAlchemy registers them on Base.metadata
from eduvillage.db.base_class import Base  # noqa: F401
from eduvillage.models import completion, course, enrollment, lecture, user  # noqa: F401
