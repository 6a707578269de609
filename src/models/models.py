from pydantic import BaseModel, Field
from typing import List, Optional

class SurveyAnswers(BaseModel):
    name: Optional[str] = None
    age: Optional[int] = None
    colours: List[str] = Field(default_factory=list)

    @property
    def summary(self) -> str:
        """
        Display-ready summary of the answers collected so far.
        """
        colours = ", ".join(self.colours) if self.colours else "none"
        return f"{self.name}, {self.age} years old. Favourite colours: {colours}."
