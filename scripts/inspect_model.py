import os
import sys

from pricecast.data.storage import ModelStorage


def inspect_model(model_path: str):
    if not os.path.exists(model_path):
        print(f"❌ Model directory not found at {model_path}")
        return 1

    print(f"✅ Model found: {model_path}")

    storage = ModelStorage(os.path.dirname(model_path) or ".")
    trained = storage.load(model_path)

    print("\n📊 Model Config:")
    for key, value in trained.config.model_dump().items():
        print(f"   - {key}: {value}")

    total_params = sum(p.numel() for p in trained.net.parameters())
    print(f"\n   Params: {total_params:,}")

    history = storage.load_history(model_path)
    if history is None or history.empty:
        print("   ⚠️ No loss history saved with this model")
    else:
        print(f"   Epochs: {len(history)}, final loss: {history['loss'].iloc[-1]:.6f}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: inspect_model.py models/<ticker>_<epoch ms>")
        sys.exit(2)
    sys.exit(inspect_model(sys.argv[1]))
