from .checker import InteractionChecker
from .credentials import StoredCredentials, initialize_client, load_credentials, save_credentials
from .errors import (
    AnalysisError,
    CredentialError,
    EmptyResponseError,
    InvalidCredentialError,
    SafetyBlockedError,
    ServiceUnavailableError,
    StorageCorruption,
    StructuredParseFailure,
)
from .exporters import csv_bytes, result_to_csv, result_to_pdf
from .gemini_client import GeminiAnalysisClient
from .models import (
    AnalysisInputs,
    AnalysisResult,
    BeersCriteriaAlert,
    DrugConditionContraindication,
    DrugDrugInteraction,
    DrugPharmacogeneticContraindication,
    DrugSubstanceInteraction,
    HighRiskItem,
    HistoryItem,
    Source,
)
from .normalizer import normalize_result
from .prompt_builder import build_prompt
from .response_parser import parse_response
from .risk import collect_high_risk
from .storage import HistoryStore
from .translations import load_translations
__all__ = [
    "AnalysisError",
    "AnalysisInputs",
    "AnalysisResult",
    "BeersCriteriaAlert",
    "CredentialError",
    "DrugConditionContraindication",
    "DrugDrugInteraction",
    "DrugPharmacogeneticContraindication",
    "DrugSubstanceInteraction",
    "EmptyResponseError",
    "GeminiAnalysisClient",
    "HighRiskItem",
    "HistoryItem",
    "HistoryStore",
    "InteractionChecker",
    "InvalidCredentialError",
    "SafetyBlockedError",
    "ServiceUnavailableError",
    "Source",
    "StorageCorruption",
    "StoredCredentials",
    "StructuredParseFailure",
    "build_prompt",
    "collect_high_risk",
    "csv_bytes",
    "initialize_client",
    "load_credentials",
    "load_translations",
    "normalize_result",
    "parse_response",
    "result_to_csv",
    "result_to_pdf",
    "save_credentials",
]
__version__ = "2025.6.1"