MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB

ACCEPTED_TYPES = ("image/jpeg", "image/png", "image/webp")

PROMPT = (
    "Please analyze and restore this uploaded photo. Create a crystal-clear, "
    "high-definition 8K restored version preserving the subject's identity, "
    "pose, expression, and composition. Fix any blur, noise, fading, or damage."
)

ORIENTATION_PROMPT = (
    " The source image is {orientation} ({width}x{height} pixels). Keep the "
    "restored image {orientation} and preserve the original aspect ratio; "
    "do not crop, rotate, or pad it."
)

# Aspect ratio thresholds (width / height), both exclusive
LANDSCAPE_RATIO = 1.3
PORTRAIT_RATIO = 0.77

# preset value -> (display name, instruction clause)
PRESETS = {
    "sharpness": (
        "Sharpness Boost",
        " Apply enhanced sharpness and fine detail recovery.",
    ),
    "lighting": (
        "Lighting Balance",
        " Optimize lighting balance and exposure.",
    ),
    "portrait": (
        "Portrait Enhance",
        " Apply portrait enhancement with skin smoothing and facial detail preservation.",
    ),
}

PROGRESS_START = 10
PROGRESS_STEP = 5
PROGRESS_CEILING = 85
PROGRESS_DONE = 100
