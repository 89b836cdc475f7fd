"""videoform_server — FastAPI app behind the video form.

Stores submissions posted by the step sequencer's submission client,
serves the step registry to front-ends, and exposes a read-only admin
viewer over recent submissions.
"""
