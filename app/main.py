"""
main.py — OpenCV entry point.

    Camera → RecognitionPipeline (AdmissionGate → HandPoseClassifier
          → ClassificationDebouncer → ConfirmationRelay) → OpenCVUI
                                                         → TicTacToeController

The camera loop is the frame producer: it offers every frame to the
pipeline and keeps rendering while a classification is in flight;
frames that arrive meanwhile are simply dropped.
"""
from __future__ import annotations
import logging
from typing import Optional

from app.config import AppConfig, default_config, setup_logging
from app.ui import OpenCVUI
from core.camera import Camera
from core.hand_tracker import HandTracker
from core.pipeline import RecognitionPipeline
from core.pose_classifier import HandPoseClassifier
from game.controller import TicTacToeController, attach
from game.engine import GameEngine, load_engine

logger = logging.getLogger(__name__)


def build_pipeline(config: AppConfig) -> tuple[RecognitionPipeline, HandTracker]:
    tracker = HandTracker(
        config.landmarker_path,
        max_num_hands=config.max_num_hands,
        min_detection_confidence=config.min_detection_confidence,
        min_presence_confidence=config.min_presence_confidence,
    )
    classifier = HandPoseClassifier(config.model_path, tracker)
    return RecognitionPipeline(classifier, threshold=config.confirm_frames), tracker


def build_controller(
    config: AppConfig, engine: Optional[GameEngine] = None
) -> Optional[TicTacToeController]:
    if engine is None and config.game_engine:
        engine = load_engine(config.game_engine)
    if engine is None:
        return None
    return TicTacToeController(engine, reset_label=config.reset_label, ai_delay=config.ai_delay)


def run(config: AppConfig = default_config, engine: Optional[GameEngine] = None) -> None:
    setup_logging(config.log_level)

    print("="*55)
    print("  HAND COUNT — debounced recognition")
    print("="*55)
    print(f"  Model    : {config.model_path}")
    print(f"  FPS cap  : {config.fps_limit}")
    print(f"  Confirm  : > {config.confirm_frames} frames")
    print("  Press ESC to quit")
    print("="*55 + "\n")

    camera = Camera(config.camera_device, config.fps_limit)
    pipeline, tracker = build_pipeline(config)
    controller = build_controller(config, engine)
    if controller is not None:
        attach(controller, pipeline.relay)
        logger.info("[STATE] game mode, reset label %r", config.reset_label)
    else:
        logger.info("[STATE] counting mode (no game engine configured)")
    ui = OpenCVUI(config)

    pipeline.start()
    try:
        for frame in camera.frames():
            # The classifier draws the skeleton on the frame it receives,
            # so it gets its own copy.
            pipeline.offer(frame.copy())

            ui.render(
                frame=frame,
                snapshot=pipeline.relay.latest,
                message=controller.message if controller else None,
                board=controller.raw_board if controller else None,
            )
            if ui.should_quit():
                break
    finally:
        pipeline.stop()
        camera.release()
        tracker.release()
        ui.close()
        print("\n✓ Application closed cleanly")


if __name__ == "__main__":
    run(AppConfig.from_env())
