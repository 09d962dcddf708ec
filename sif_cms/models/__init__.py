# Base.metadata 에 모든 테이블을 등록하기 위한 import
from sif_cms.models.user import User, Role  # noqa: F401
from sif_cms.models.content import (  # noqa: F401
    HomeSection,
    AboutSection,
    GalleryImage,
    Pitch,
    NewsletterPost,
    Event,
    Note,
)
from sif_cms.models.holding import Holding, Portfolio  # noqa: F401
from sif_cms.models.admin_log import AdminActionLog, AdminAction  # noqa: F401
