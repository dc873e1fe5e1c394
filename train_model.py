from pathlib import Path

import pandas as pd
import joblib
from sklearn.model_selection import train_test_split
from sklearn.ensemble import RandomForestClassifier
from sklearn.metrics import classification_report, confusion_matrix, accuracy_score

from utils.constants import CSV_PATH, LABEL_COLUMN, MODEL_PATH
from utils.geometry import FEATURE_NAMES

RANDOM_SEED = 42


def main(csv_path=CSV_PATH, model_path=MODEL_PATH):
    # ========================
    # Load dataset
    # ========================
    df = pd.read_csv(csv_path, dtype={LABEL_COLUMN: str})
    print("Dataset cargado:", df.shape)

    print("\nDistribución de etiquetas:")
    print(df[LABEL_COLUMN].value_counts())

    # ========================
    # Features / Labels
    # ========================
    X = df[FEATURE_NAMES]
    y = df[LABEL_COLUMN]

    X_train, X_test, y_train, y_test = train_test_split(
        X,
        y,
        test_size=0.2,
        random_state=RANDOM_SEED,
        stratify=y
    )
    print(f"\nTrain: {X_train.shape}")
    print(f"Test : {X_test.shape}")

    # ========================
    # Model
    # ========================
    model = RandomForestClassifier(
        n_estimators=150,
        min_samples_leaf=3,
        random_state=RANDOM_SEED,
        n_jobs=-1,
    )
    model.fit(X_train, y_train)

    # ========================
    # Evaluate
    # ========================
    y_pred = model.predict(X_test)

    print("\n" + "="*50)
    print("RESULTADOS")
    print("="*50)
    print(f"\nAccuracy en Train: {model.score(X_train, y_train):.4f}")
    print(f"Accuracy en Test:  {accuracy_score(y_test, y_pred):.4f}")
    print("\n=== Classification Report ===")
    print(classification_report(y_test, y_pred))
    print("\n=== Confusion Matrix ===")
    print(confusion_matrix(y_test, y_pred))

    # ========================
    # Save model
    # ========================
    model_path = Path(model_path)
    model_path.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, model_path)
    print(f"\n✓ Modelo guardado en: {model_path}")
    return model


if __name__ == "__main__":
    main()
