import os
import json
from importlib import import_module
from sqlalchemy.exc import IntegrityError
from genedensity.db.base import Base
from genedensity.utils.db_loader import load_all_models


class CreateDBMixin:
    def create_db(self, overwrite=False, seed_file=None):
        if self.exists_db() and not overwrite:
            msn = f"Database already exists at {self.db_uri}"
            self.logger.log(msn, "WARNING")
            return False

        self.connect(check_exists=False)

        self.logger.log("Loading models...", "INFO")
        load_all_models()

        if overwrite:
            self.logger.log("Dropping existing tables...", "WARNING")
            Base.metadata.drop_all(self.engine)

        self.logger.log("Creating tables...", "INFO")
        self._create_tables()

        if seed_file:
            self.logger.log(f"Seeding data from {seed_file}...", "INFO")
            self._seed_all(seed_file)

        self.logger.log(f"Database created at {self.db_uri}", "INFO")
        return True

    def _create_tables(self):
        load_all_models()
        Base.metadata.create_all(self.engine)

    def _seed_all(self, seed_file):
        self._seed_from_json(
            seed_file, "model_core", "SeqRegion", key="seq_regions"
        )
        self._seed_from_json(seed_file, "model_core", "Gene", key="genes")

    def _seed_from_json(self, file, module_name, model_name, key=None):
        model_module = import_module(f"genedensity.db.models.{module_name}")
        model_class = getattr(model_module, model_name)

        json_path = file
        if not os.path.isabs(json_path) and not os.path.exists(json_path):
            json_path = os.path.join(os.path.dirname(__file__), file)
        if not os.path.exists(json_path):
            self.logger.log(f"JSON not found: {json_path}", "WARNING")
            return

        with self.get_session() as session:
            with open(json_path, "r") as f:
                data = json.load(f)
            records = data.get(key, []) if key else data

            seq_region_class = import_module(
                "genedensity.db.models.model_core"
            ).SeqRegion

            for item in records:
                # Search FK ID from Names
                if "seq_region" in item:
                    fk_name = item.pop("seq_region")
                    fk_qry = (
                        session.query(seq_region_class)
                        .filter_by(name=str(fk_name))
                        .first()
                    )
                    if not fk_qry:
                        self.logger.log(
                            f"Seq region not found for name: {fk_name}",
                            "WARNING",
                        )
                        continue
                    item["seq_region_id"] = fk_qry.id

                session.add(model_class(**item))
            try:
                session.commit()
                self.logger.log(f"Seeded: {model_name}", "INFO")
            except IntegrityError:
                session.rollback()
                msn = f"{model_name} data already exists. Skipping."
                self.logger.log(msn, "WARNING")
