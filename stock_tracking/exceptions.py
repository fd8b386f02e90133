"""
Error taxonomy for a stock tracking job.

Every error is fatal to the current job. `status_code` tells the upload
boundary whether the caller (400) or the processing (500) is at fault.
"""


class StockTrackingError(Exception):
    status_code = 500


class InvalidDateFormat(StockTrackingError):
    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Format de date invalide: {value}. Utilisez DD/MM/YYYY ou YYYY-MM-DD"
        )


class MissingSheet(StockTrackingError):
    def __init__(self, sheet_name: str):
        self.sheet_name = sheet_name
        super().__init__(f'Feuille "{sheet_name}" introuvable')


class DuplicateImport(StockTrackingError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Les données pour la date {label} ont déjà été importées")


class MissingRequiredFile(StockTrackingError):
    status_code = 400

    def __init__(self, file_id: str):
        self.file_id = file_id
        super().__init__(f"Fichier manquant: {file_id}")


class MissingRequiredParameter(StockTrackingError):
    status_code = 400

    def __init__(self, param_id: str):
        self.param_id = param_id
        super().__init__(f"Paramètre manquant: {param_id}")


class TreatmentUnavailable(StockTrackingError):
    status_code = 400

    def __init__(self, treatment_id: str):
        self.treatment_id = treatment_id
        super().__init__(
            "Ce traitement est en cours de développement. "
            'Seul "Suivi des Stocks" est disponible pour le moment.'
        )


class InvalidUpload(StockTrackingError):
    status_code = 400
