"""
CameraWorker — corre la captura en un QThread y emite señales con la
información necesaria para actualizar la UI.

El hilo del worker es el productor de frames; la clasificación corre en
el hilo de RecognitionPipeline, así que los frames que llegan mientras
hay una clasificación en curso se descartan sin frenar el video.
"""
from __future__ import annotations
from typing import Optional

import numpy as np
from PyQt6.QtCore import QThread, pyqtSignal

from app.config import AppConfig
from core.camera import Camera
from core.hand_tracker import HandTracker
from core.pipeline import RecognitionPipeline
from core.pose_classifier import HandPoseClassifier
from domain.models import RecognitionSnapshot


class CameraWorker(QThread):
    """
    QThread que ejecuta captura + reconocimiento.

    Señales:
        frame_ready      — frame BGR como np.ndarray (cada frame)
        snapshot_changed — RecognitionSnapshot (cada clasificación)
        label_confirmed  — etiqueta confirmada (una vez por confirmación)
        status_msg       — string de log para mostrar en la UI
    """

    frame_ready      = pyqtSignal(np.ndarray)
    snapshot_changed = pyqtSignal(object)   # RecognitionSnapshot
    label_confirmed  = pyqtSignal(str)
    status_msg       = pyqtSignal(str)

    def __init__(self, config: AppConfig, parent=None) -> None:
        super().__init__(parent)
        self._config  = config
        self._running = False

        # Componentes (se crean en run() para vivir en el hilo correcto)
        self._camera:   Optional[Camera]              = None
        self._tracker:  Optional[HandTracker]         = None
        self._pipeline: Optional[RecognitionPipeline] = None

    # ------------------------------------------------------------------
    def run(self) -> None:
        """Bucle principal — corre en el hilo del worker."""
        cfg = self._config

        try:
            self._camera  = Camera(cfg.camera_device, cfg.fps_limit)
            self._tracker = HandTracker(
                cfg.landmarker_path,
                max_num_hands=cfg.max_num_hands,
                min_detection_confidence=cfg.min_detection_confidence,
                min_presence_confidence=cfg.min_presence_confidence,
            )
            classifier = HandPoseClassifier(cfg.model_path, self._tracker)
            self._pipeline = RecognitionPipeline(classifier, threshold=cfg.confirm_frames)
        except Exception as exc:
            self.status_msg.emit(f"[ERROR] Inicialización: {exc}")
            self._cleanup()
            return

        # Las señales Qt son seguras entre hilos: se emiten desde el hilo
        # de clasificación y se entregan en el hilo de la UI.
        self._pipeline.relay.subscribe(self._on_snapshot)
        self._pipeline.relay.subscribe_confirmed(self._on_confirmed)
        self._pipeline.start()

        self._running = True
        self.status_msg.emit("✅ Pipeline iniciado")

        while self._running:
            frame = self._camera.read()
            if frame is None:
                self.status_msg.emit("[WARN] Frame vacío — reintentando")
                self.msleep(50)
                continue

            self._pipeline.offer(frame.copy())
            self.frame_ready.emit(frame)

        self._cleanup()

    # ------------------------------------------------------------------
    def _on_snapshot(self, snapshot: RecognitionSnapshot) -> None:
        self.snapshot_changed.emit(snapshot)

    def _on_confirmed(self, label: str) -> None:
        self.status_msg.emit(f"[EVENT] Confirmado: {label}")
        self.label_confirmed.emit(label)

    def reset_recognition(self) -> None:
        """Olvida la lectura actual (p. ej. al reiniciar el juego desde la UI)."""
        if self._pipeline is not None:
            self._pipeline.reset()

    # ------------------------------------------------------------------
    def stop(self) -> None:
        self._running = False
        self.wait(3000)  # espera hasta 3s a que termine

    def _cleanup(self) -> None:
        if self._pipeline:
            self._pipeline.stop()
            stats = self._pipeline.stats
            self.status_msg.emit(
                f"[STATE] frames={stats.offered} descartados={stats.dropped} "
                f"fallos={stats.classifier_faults}"
            )
        if self._camera:
            self._camera.release()
        if self._tracker:
            self._tracker.release()
        self.status_msg.emit("🛑 Pipeline detenido")
