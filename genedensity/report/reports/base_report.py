from sqlalchemy.orm import Session
from pathlib import Path


class ReportBase:
    name: str = "unnamed_report"
    description: str = "No description provided"

    def __init__(self, session: Session = None, logger=None, **kwargs):
        self.session = session
        self.logger = logger
        self.params = kwargs

    @classmethod
    def explain(cls) -> str:
        return "No explanation provided."

    def run(self):
        raise NotImplementedError("Subclasses must implement `run()`.")

    def resolve_input_list(self, input_data, param_name="input_data"):
        """
        Resolves the input_data into a list of strings:
        - None → empty list (no filter)
        - list → returns as is
        - comma separated string → split
        - path to txt file → loads as list
        """
        if input_data is None:
            return []

        if isinstance(input_data, (list, tuple, set)):
            return [str(item) for item in input_data]

        if isinstance(input_data, str):
            path = Path(input_data)
            if path.exists():
                with path.open() as f:
                    return [line.strip() for line in f if line.strip()]
            return [item.strip() for item in input_data.split(",") if item.strip()]  # noqa E501

        raise ValueError(f"{param_name} must be a list or a path to a text file.")
