from core.admission_gate import AdmissionGate, GateReleaseError
from core.debouncer import ClassificationDebouncer
from core.relay import ConfirmationRelay
from core.pipeline import LabelClassifier, PipelineStats, RecognitionPipeline

# Camera, HandTracker and HandPoseClassifier pull in OpenCV / MediaPipe;
# import them from their modules directly.

__all__ = [
    "AdmissionGate",
    "GateReleaseError",
    "ClassificationDebouncer",
    "ConfirmationRelay",
    "LabelClassifier",
    "PipelineStats",
    "RecognitionPipeline",
]
