"""All magic numbers and configuration defaults."""

DEFAULT_MAX_CHARS = 10000           # chars: upper bound per chunk (exclusive)
MIN_CHUNK_CHARS = 10                # chars: chunks shorter than this are not synthesized
MIN_ADHOC_CHARS = 2                 # chars: minimum for free-form text
TTS_TIMEOUT_SECONDS = 120           # hard bound on a single edge-tts invocation
DEFAULT_VOICE = "en-US-AriaNeural"
DEFAULT_RATE = "+0%"                # speech rate: signed percentage relative to normal
WORDS_PER_MINUTE = 150              # listening-time estimate
PREVIEW_CHARS = 100                 # chunk preview length in document summaries
AUDIO_DIR = "audio"                 # server cache directory
CLI_OUTPUT_DIR = "audio_output"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
EDGE_TTS_CANDIDATES = (
    "~/.local/bin/edge-tts",
    "/usr/local/bin/edge-tts",
    "/usr/bin/edge-tts",
)
VERSION = "0.1.0"
