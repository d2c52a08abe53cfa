import os
from decimal import Decimal
from http import HTTPStatus

import click
from flask import Flask, jsonify, request

from prepay_calc.analysis import recompute
from prepay_calc.main import build_inputs_from_options
from prepay_calc.tax import TaxRules

app = Flask(__name__)

# Defaults shown when the form is first opened
DEFAULT_INPUTS = {
    "principal": 5000000,
    "annualRatePercent": 9.0,
    "tenureYears": 20,
    "extraCash": 500000,
    "investmentReturnPercent": 12,
    "investmentType": "equity",
    "taxRegime": "old",
    "taxSlabPercent": 30,
    "used80CAmount": 150000,
    "isSelfOccupied": True,
    "isJointLoan": False,
    "prepaymentMethod": "reduceTenure",
}


def _rules_from_env() -> TaxRules:
    defaults = TaxRules()
    return TaxRules(
        interest_limit=Decimal(os.environ.get("PREPAY_SECTION_24B_LIMIT", defaults.interest_limit)),
        principal_limit=Decimal(os.environ.get("PREPAY_SECTION_80C_LIMIT", defaults.principal_limit)),
        ltcg_rate=Decimal(os.environ.get("PREPAY_LTCG_RATE", defaults.ltcg_rate)),
        ltcg_exemption=Decimal(os.environ.get("PREPAY_LTCG_EXEMPTION", defaults.ltcg_exemption)),
    )


app.config["TAX_RULES"] = _rules_from_env()


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _payload_to_inputs(payload: dict):
    """Map the camelCase request body onto the calculator inputs.

    Missing keys fall back to ``DEFAULT_INPUTS``.
    """
    data = {**DEFAULT_INPUTS, **(payload or {})}
    return build_inputs_from_options(
        data["principal"],
        data["annualRatePercent"],
        data["tenureYears"],
        data["extraCash"],
        data["investmentReturnPercent"],
        data["investmentType"],
        data["taxRegime"],
        data["taxSlabPercent"],
        data["used80CAmount"],
        _as_bool(data["isSelfOccupied"]),
        _as_bool(data["isJointLoan"]),
        data["prepaymentMethod"],
    )


@app.get("/api/defaults")
def defaults():
    return jsonify(DEFAULT_INPUTS)


@app.post("/api/analyze")
def analyze():
    """Run the prepay-or-invest analysis for the posted inputs."""
    payload = request.get_json(silent=True)
    if payload is not None and not isinstance(payload, dict):
        return jsonify({"error": "request body must be a JSON object"}), HTTPStatus.BAD_REQUEST
    try:
        inputs = _payload_to_inputs(payload)
    except click.BadParameter as exc:
        return jsonify({"error": exc.message}), HTTPStatus.BAD_REQUEST
    result = recompute(inputs, app.config["TAX_RULES"])
    return jsonify(result.to_dict()), HTTPStatus.OK


if __name__ == "__main__":
    print("Starting Prepay-or-Invest web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
