from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from typing import Optional, Union
import uuid

# Range of a SQLite INTEGER column
SERVINGS_MIN = -(2**63)
SERVINGS_MAX = 2**63 - 1

# Fields a client must supply when creating a recipe
REQUIRED_FIELDS = (
    "name",
    "ingredients",
    "instructions",
    "difficulty",
    "servings",
    "cook_time",
    "prep_time",
    "category",
)


class RecipeBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: str = Field(alias="recipeName", min_length=1)
    description: Optional[str] = None
    ingredients: str = Field(min_length=1)
    instructions: str = Field(min_length=1)
    difficulty: str = Field(min_length=1)
    servings: int = Field(ge=SERVINGS_MIN, le=SERVINGS_MAX)
    cook_time: float = Field(alias="cookTime")
    prep_time: float = Field(alias="prepTime")
    youtube_link: Optional[str] = Field(default=None, alias="youtubeLink")
    language: Optional[str] = None
    category: str = Field(min_length=1)
    status: Optional[str] = None
    image: Optional[str] = None


class Recipe(RecipeBase):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    upload_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="uploadDate"
    )


class RecipeCreate(RecipeBase):
    pass


class RecipeUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    name: Optional[str] = Field(default=None, alias="recipeName", min_length=1)
    description: Optional[str] = None
    ingredients: Optional[str] = Field(default=None, min_length=1)
    instructions: Optional[str] = Field(default=None, min_length=1)
    difficulty: Optional[str] = Field(default=None, min_length=1)
    servings: Optional[int] = Field(default=None, ge=SERVINGS_MIN, le=SERVINGS_MAX)
    cook_time: Optional[float] = Field(default=None, alias="cookTime")
    prep_time: Optional[float] = Field(default=None, alias="prepTime")
    youtube_link: Optional[str] = Field(default=None, alias="youtubeLink")
    language: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1)
    status: Optional[str] = None
    image: Optional[str] = None


class RecipeDraft(BaseModel):
    """Raw incoming recipe fields, every one optional and unvalidated.

    Built straight from a form or JSON body; unknown keys (including ``id``
    and ``uploadDate``) are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = Field(default=None, alias="recipeName")
    description: Optional[str] = None
    ingredients: Optional[str] = None
    instructions: Optional[str] = None
    difficulty: Optional[str] = None
    servings: Optional[Union[str, float]] = None
    cook_time: Optional[Union[str, float]] = Field(default=None, alias="cookTime")
    prep_time: Optional[Union[str, float]] = Field(default=None, alias="prepTime")
    youtube_link: Optional[str] = Field(default=None, alias="youtubeLink")
    language: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None

    def supplied(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)
