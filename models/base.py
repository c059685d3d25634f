from sqlalchemy.orm import declarative_base
import enum

Base = declarative_base()


# ============================================================================
# ENUMS
# ============================================================================

class StructureType(str, enum.Enum):
    """Physical structure of a navigation aid"""
    BUOY = "buoy"
    BEACON = "beacon"


class MarkCategory(str, enum.Enum):
    """IALA mark system category"""
    LATERAL = "lateral"
