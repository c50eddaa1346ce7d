"""
Calculator Server - expression evaluation HTTP endpoint

Exposes the calculator expression engine via HTTP using FastAPI, for
presentation layers that do not embed the Python engine directly.

Environment variables:
    SCICALC_APP_HOST - Host to bind to (default: 0.0.0.0)
    SCICALC_APP_PORT - Port to listen on (default: 8098)
    SCICALC_DEFAULT_ANGLE_UNIT - Angle unit when a request omits one (default: degrees)
    SCICALC_MAX_EXPRESSION_LENGTH - Longest accepted expression (default: 1024)
    SCICALC_LOG_LEVEL - Log level (debug, info, warning, error)

Usage:
    python -m scicalc.server.calc_server
    SCICALC_DEFAULT_ANGLE_UNIT=radians python -m scicalc.server.calc_server
"""

from __future__ import annotations

import os

import uvicorn
from fastapi import FastAPI

from naylence.fame.util.logging import enable_logging, getLogger
from scicalc.expr import (
    DEFAULT_EXPRESSION_LIMITS,
    MATH_CONSTANTS,
    MATH_FUNCTIONS,
    AngleUnit,
    ExpressionLimits,
    evaluate_expression,
)
from scicalc.server.fastapi_model import (
    EvaluateRequest,
    EvaluateResponse,
    FunctionCatalog,
    FunctionInfo,
)

ENV_VAR_LOG_LEVEL = "SCICALC_LOG_LEVEL"
ENV_VAR_SCICALC_APP_HOST = "SCICALC_APP_HOST"
ENV_VAR_SCICALC_APP_PORT = "SCICALC_APP_PORT"
ENV_VAR_DEFAULT_ANGLE_UNIT = "SCICALC_DEFAULT_ANGLE_UNIT"
ENV_VAR_MAX_EXPRESSION_LENGTH = "SCICALC_MAX_EXPRESSION_LENGTH"

DEFAULT_PREFIX = "/scicalc/v1"

enable_logging(log_level=os.getenv(ENV_VAR_LOG_LEVEL, "warning"))
logger = getLogger(__name__)


def angle_unit_from_env() -> AngleUnit:
    """Read the default angle unit from the environment."""
    value = os.getenv(ENV_VAR_DEFAULT_ANGLE_UNIT, AngleUnit.DEGREES.value)
    return AngleUnit(value.strip().lower())


def limits_from_env() -> ExpressionLimits:
    """Read expression limits from the environment."""
    max_length = os.getenv(ENV_VAR_MAX_EXPRESSION_LENGTH)
    if not max_length:
        return DEFAULT_EXPRESSION_LIMITS
    return ExpressionLimits(max_expression_length=int(max_length))


def create_app(
    *,
    default_angle_unit: AngleUnit | None = None,
    limits: ExpressionLimits | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> FastAPI:
    """Create and return a FastAPI application for evaluating expressions."""
    angle_unit_default = default_angle_unit or angle_unit_from_env()
    expression_limits = limits or limits_from_env()

    app = FastAPI(
        title="Calculator Server",
        description="Safe evaluation of scientific calculator expressions",
    )

    @app.post(f"{prefix}/evaluate", response_model=EvaluateResponse)
    async def evaluate(request: EvaluateRequest):
        """
        Evaluate one expression.

        Expression errors are part of a successful response: the body carries
        the text to display and ``isError``.
        """
        angle_unit = request.angle_unit or angle_unit_default
        display = evaluate_expression(request.expression, angle_unit, expression_limits)

        if display.is_error:
            logger.debug(
                "expression_failed",
                angle_unit=angle_unit.value,
                error_kind=display.error_kind.value if display.error_kind else None,
            )

        return EvaluateResponse(
            display_text=display.display_text,
            is_error=display.is_error,
            error_kind=display.error_kind.value if display.error_kind else None,
            angle_unit=angle_unit,
        )

    @app.get(f"{prefix}/functions", response_model=FunctionCatalog)
    async def list_functions():
        """List the recognized functions and constants."""
        return FunctionCatalog(
            functions=[
                FunctionInfo(
                    name=function.name,
                    arity=function.arity,
                    angle_policy=function.angle_policy.value if function.angle_policy else None,
                )
                for function in MATH_FUNCTIONS.values()
            ],
            constants=list(MATH_CONSTANTS.keys()),
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "calculator-server",
            "defaultAngleUnit": angle_unit_default.value,
            "maxExpressionLength": expression_limits.max_expression_length,
        }

    logger.info(
        "calculator_app_created",
        default_angle_unit=angle_unit_default.value,
        max_expression_length=expression_limits.max_expression_length,
    )

    return app


def main():
    """Main entry point for the calculator server."""
    app = create_app()
    host = os.getenv(ENV_VAR_SCICALC_APP_HOST, "0.0.0.0")
    port = int(os.getenv(ENV_VAR_SCICALC_APP_PORT, "8098"))

    print(f"\n📍 Calculator Server listening on http://{host}:{port}")
    print(f"🧮 Evaluate: POST http://{host}:{port}{DEFAULT_PREFIX}/evaluate")
    print(f"📋 Functions: http://{host}:{port}{DEFAULT_PREFIX}/functions")
    print(f"🔍 Health check: http://{host}:{port}/health")
    print(f"📐 Default angle unit: {angle_unit_from_env().value}")
    print("")

    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
