from typing import List, Optional

from pydantic import BaseModel, Field

from scicalc.expr import AngleUnit


class EvaluateRequest(BaseModel):
    """Expression evaluation request payload."""

    expression: str = Field(..., description="Expression as typed by the user")
    angle_unit: Optional[AngleUnit] = Field(
        None,
        description="Angle unit for trigonometric functions; server default when omitted",
        alias="angleUnit",
    )

    model_config = {"populate_by_name": True}


class EvaluateResponse(BaseModel):
    """Expression evaluation response."""

    display_text: str = Field(..., description="Text to show on the calculator display", alias="displayText")
    is_error: bool = Field(..., description="Whether display_text is an error message", alias="isError")
    error_kind: Optional[str] = Field(None, description="Fine-grained error kind", alias="errorKind")
    angle_unit: AngleUnit = Field(..., description="Angle unit the expression was evaluated in", alias="angleUnit")

    model_config = {"populate_by_name": True}


class FunctionInfo(BaseModel):
    """A recognized calculator function."""

    name: str = Field(..., description="Function name")
    arity: int = Field(..., description="Number of arguments")
    angle_policy: Optional[str] = Field(
        None, description="'argument' or 'result' for trigonometric functions", alias="anglePolicy"
    )

    model_config = {"populate_by_name": True}


class FunctionCatalog(BaseModel):
    """Recognized functions and constants."""

    functions: List[FunctionInfo] = Field(..., description="Recognized functions")
    constants: List[str] = Field(..., description="Recognized constant names")
