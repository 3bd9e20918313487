import argparse
import logging
from pathlib import Path
from typing import Optional

import colorlog

from loss_modeling.core.utils import get_report_paths

try:
    # Prefer package-defined version
    from loss_modeling import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = None  # type: ignore[assignment]
    try:
        # Fallback to installed package metadata
        from importlib.metadata import version as _pkg_version, PackageNotFoundError

        _PACKAGE_VERSION = _pkg_version("loss-modeling-tools")  # type: ignore[assignment]
    except PackageNotFoundError:
        _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate the loss modeling artifacts given on the command line.

    Returns:
        0 if all validations passed without errors
        1 if nothing was validated (no artifacts given or inputs unreadable)
        2 if any validation errors were found
    """
    from loss_modeling.validation import config, registry
    from loss_modeling.validation.report import ReportGenerator, save_json, save_report

    if getattr(args, "power", None) is not None and not getattr(args, "tweedie_fit", None):
        logging.warning("--power is ignored without --tweedie-fit")

    inputs = {}
    try:
        if getattr(args, "thresholds", None):
            inputs["thresholds"] = config.load_thresholds(args.thresholds)
        if getattr(args, "raw_data", None):
            inputs["raw_data"] = registry.load_table(args.raw_data)
        if getattr(args, "model_data", None):
            inputs["model_data"] = registry.load_table(args.model_data)
        if getattr(args, "tweedie_fit", None):
            fit = registry.load_tweedie_fit(args.tweedie_fit)
            power = getattr(args, "power", None)
            if power is None:
                power = fit.power
            if power is None:
                logging.error(
                    "No power parameter for %s: add 'power' to the file or pass --power",
                    args.tweedie_fit,
                )
                return 1
            inputs["tweedie_model"] = fit
            inputs["power"] = power
        if getattr(args, "evt_fit", None):
            inputs["gev_fit"], inputs["gpd_fit"] = registry.load_evt_fits(args.evt_fit)
        if getattr(args, "predictions", None):
            inputs["actual"], inputs["predicted"] = registry.load_predictions(
                args.predictions,
                actual_col=getattr(args, "actual_col", "actual"),
                predicted_col=getattr(args, "predicted_col", "predicted"),
            )
    except FileNotFoundError as e:
        logging.error("Input not found: %s", e)
        return 1
    except ValueError as e:
        logging.error("Invalid input: %s", e)
        return 1

    if len(set(inputs) - {"thresholds"}) == 0:
        logging.error(
            "Nothing to validate: pass at least one of --raw-data, --model-data, "
            "--tweedie-fit, --evt-fit, --predictions"
        )
        return 1

    report = registry.run_validation(
        tolerance_pct=getattr(args, "tolerance", None), **inputs
    )
    registry.print_report(report)

    generator = ReportGenerator()
    default_text_path, default_json_path = get_report_paths()

    report_arg = getattr(args, "report", False)
    if report_arg:
        report_path = default_text_path if report_arg is True else Path(report_arg)
        save_report(generator.generate(report), report_path)

    report_json_arg = getattr(args, "report_json", False)
    if report_json_arg:
        json_path = default_json_path if report_json_arg is True else Path(report_json_arg)
        save_json(generator.to_json(report), json_path)

    strict = bool(getattr(args, "strict", False))
    if report.has_errors(strict=strict):
        logging.warning(
            "Validation failed: %d errors, %d warnings",
            report.get_error_count(),
            report.get_warning_count(),
        )
        return 2

    logging.info("Validation passed")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="loss-modeling",
        description=f"Loss Modeling Tools (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_validate = sub.add_parser("validate", help="Validate loss modeling pipeline artifacts")
    p_validate.add_argument("--raw-data", default=None, help="Raw CAS Schedule P CSV")
    p_validate.add_argument(
        "--model-data", default=None, help="Per company-year modeling table CSV"
    )
    p_validate.add_argument(
        "--tweedie-fit",
        default=None,
        help="YAML summary of the fitted Tweedie GLM (converged, coefficients, pvalues, ...)",
    )
    p_validate.add_argument(
        "--power",
        type=float,
        default=None,
        help="Tweedie power parameter (overrides 'power' in the fit summary)",
    )
    p_validate.add_argument(
        "--evt-fit", default=None, help="YAML file with 'gev' and 'gpd' parameter estimates"
    )
    p_validate.add_argument(
        "--predictions", default=None, help="CSV with actual and predicted columns"
    )
    p_validate.add_argument(
        "--actual-col", default="actual", help="Column of actual values (default: actual)"
    )
    p_validate.add_argument(
        "--predicted-col",
        default="predicted",
        help="Column of predicted values (default: predicted)",
    )
    p_validate.add_argument(
        "--tolerance",
        type=float,
        default=None,
        help="Acceptable mean absolute percentage error (default: 20)",
    )
    p_validate.add_argument(
        "--thresholds", default=None, help="YAML file overriding validation thresholds"
    )
    p_validate.add_argument(
        "--strict", action="store_true", help="Treat warnings as errors for the exit code"
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Save the text report (default results/validation_report.txt). Optionally specify a path.",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Save a JSON report (default results/validation_report.json). Optionally specify a path.",
    )
    p_validate.set_defaults(func=cmd_validate)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
