from genedensity.db.database import Database
from genedensity.utils.config import load_config
from genedensity.utils.logger import Logger
from genedensity.density.classifier import GeneTypeClassifier
from genedensity.density.density_manager import DensityManager, read_limit_file
from genedensity.report.report_manager import ReportManager


def comma_to_list(values) -> list:
    """Accepts "1,2,X", ["1", "2,X"] or None and returns ["1", "2", "X"]."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    result = []
    for value in values:
        result.extend(v.strip() for v in str(value).split(",") if v.strip())
    return result


class GeneDensity:
    def __init__(self, db_uri: str = None, config_file: str = None, connect=True):  # noqa E501
        self.config = load_config(config_file)
        log_config = self.config["logging"]
        self.logger = Logger(
            log_file=log_config["log_file"], log_level=log_config["log_level"]
        )
        self.db_uri = db_uri or self.config["database"].get("db_uri")
        self.db = None

        if self.db_uri and connect:
            self.connect_db()

    def create_new_project(self, db_uri: str, overwrite=False, seed_file=None):
        """Create a new density database (tables, optional seed data)."""
        self.logger.log(f"Creating database at {db_uri}", "INFO")
        created = self._create_db(
            db_uri=db_uri, overwrite=overwrite, seed_file=seed_file
        )
        if created:
            self.logger.log(f"Database ready at {self.db.db_uri}", "INFO")
        else:
            msg = f"Database not created at {db_uri}, use --overwrite to replace it"  # noqa E501
            self.logger.log(msg, "WARNING")
        return created

    def _create_db(self, db_uri: str = None, overwrite=False, seed_file=None):
        if db_uri:
            self.db_uri = db_uri
        if not self.db_uri:
            msn = "Database URI must be set before creating the database."
            self.logger.log(msn, "ERROR")
            raise ValueError(msn)
        self.db = Database()  # Do not pass db_uri here
        self.db.db_uri = self.db_uri
        return self.db.create_db(overwrite=overwrite, seed_file=seed_file)

    def connect_db(self, new_uri: str = None):
        if new_uri:
            self.db_uri = new_uri
        self.db = Database(self.db_uri)

    def _require_db(self):
        if not self.db:
            msg = "Database not connected. Use connect_db() first."
            self.logger.log(msg, "ERROR")
            raise RuntimeError(msg)

    def _manager(self, session, gene_types=None, threshold=None, target_bins=None):  # noqa E501
        density_config = self.config["density"]
        classifier = GeneTypeClassifier.from_json(
            gene_types or density_config.get("gene_types")
        )
        return DensityManager(
            session=session,
            classifier=classifier,
            analysis_tag=density_config["analysis_tag"],
            threshold=threshold or density_config["threshold"],
            target_bins=target_bins or density_config["target_bins"],
            logger=self.logger,
        )

    def run(
        self,
        chromosomes: list = None,
        dry_run: bool = False,
        prune: bool = False,
        limit_file: str = None,
        threshold: int = None,
        target_bins: int = None,
        gene_types: str = None,
        verbose: bool = False,
    ):
        """
        Computes gene densities and chromosome statistics.

        Parameters:
        - chromosomes: names to process ("1,2,X" or a list). Default: all.
        - dry_run: compute and log but do not write to the database.
        - prune: delete the results of previous runs and stop.
        - limit_file: only count genes whose stable id is listed in the file.
        - threshold / target_bins: block size planning parameters.
        - gene_types: JSON with the biotype/status table.
        - verbose: log per-bin counts.

        Returns the RunContext of the run, or the prune status in prune mode.
        """
        self._require_db()
        if verbose:
            self.logger.set_log_level("DEBUG")

        limit_ids = read_limit_file(limit_file) if limit_file else None

        with self.db.get_session() as session:
            manager = self._manager(session, gene_types, threshold, target_bins)

            if prune:
                return manager.prune()

            self.logger.log("🚀 Starting gene density run...", "INFO")
            context = manager.start_process(
                chromosomes=comma_to_list(chromosomes) or None,
                dry_run=dry_run,
                limit_ids=limit_ids,
            )
        return context

    def prune(self, gene_types: str = None) -> bool:
        return self.run(prune=True, gene_types=gene_types)

    def check_types(self, gene_types: str = None) -> dict:
        """Logs the biotype/status pairs of the database, flagging new ones."""
        self._require_db()
        with self.db.get_session() as session:
            return self._manager(session, gene_types).check_pairs()

    def report(self, name: str, **kwargs):
        self._require_db()
        kwargs.setdefault("analysis_tag", self.config["density"]["analysis_tag"])
        with self.db.get_session() as session:
            manager = ReportManager(session=session, logger=self.logger)
            return manager.run_report(name, **kwargs)

    def list_reports(self) -> list:
        return ReportManager(session=None, logger=self.logger).list_reports()

    def explain_report(self, name: str) -> str:
        return ReportManager(session=None, logger=self.logger).explain(name)

    def __repr__(self):
        return f"<GeneDensity(db_uri={self.db_uri})>"
