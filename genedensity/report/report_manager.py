# report_manager.py
import pkgutil
import importlib
from sqlalchemy.orm import Session
from genedensity.utils.logger import Logger
import genedensity.report.reports as reports_pkg
from genedensity.report.reports.base_report import ReportBase


class ReportManager:
    def __init__(self, session: Session, logger: Logger):
        self.session = session
        self.logger = logger

    def _load_report_class(self, name: str):
        module = importlib.import_module(f"genedensity.report.reports.{name}")
        for attr in dir(module):
            obj = getattr(module, attr)
            if (
                isinstance(obj, type)
                and issubclass(obj, ReportBase)
                and obj != ReportBase
            ):
                return obj
        raise ImportError(f"No valid report class found in {name}")

    def _resolve_report_module(self, identifier: str) -> str:
        # 1) If already a module name
        if identifier.startswith("report_"):
            return identifier

        # 2) Otherwise, match by report_class.name
        for _, mod_name, _ in pkgutil.iter_modules(reports_pkg.__path__):
            if mod_name.startswith("report_"):
                cls = self._load_report_class(mod_name)
                if cls.name == identifier:
                    return mod_name

        raise ValueError(f"Report not found: {identifier}")

    # ----------------------------------
    # LIST ALL REPORTS
    # ----------------------------------
    def list_reports(self) -> list:
        """
        Lists all available reports.

        Returns:
            List[Dict]: report metadata with name and description.
        """
        reports = []
        for _, name, _ in pkgutil.iter_modules(reports_pkg.__path__):
            if name.startswith("report_"):
                report_class = self._load_report_class(name)
                reports.append(
                    {
                        "name": report_class.name,
                        "description": getattr(report_class, "description", ""),  # noqa E501
                    }
                )
        return sorted(reports, key=lambda r: r["name"])

    # ----------------------------------
    # RUN ONE REPORT
    # ----------------------------------
    def run_report(self, name: str, **kwargs):
        module_name = self._resolve_report_module(name)
        report_class = self._load_report_class(module_name)

        report = report_class(session=self.session, logger=self.logger, **kwargs)
        self.logger.log(f"📄 Running report '{report_class.name}'", "INFO")
        return report.run()

    def explain(self, name: str) -> str:
        module_name = self._resolve_report_module(name)
        return self._load_report_class(module_name).explain()
