from jinja2 import BaseLoader, Environment

from app.lib.validation import SubmissionRequest

# Autoescape is on: every value below is user input.
_env = Environment(loader=BaseLoader(), autoescape=True, trim_blocks=True, lstrip_blocks=True)

REQUEST_TEMPLATE = """
<h2>New Request Details</h2>
<p><strong>Name:</strong> {{ name }}</p>
<p><strong>Email:</strong> {{ email }}</p>
<p><strong>Message:</strong> {{ message }}</p>
<p><strong>Grade:</strong> {{ grade }}</p>
<p><strong>Subjects:</strong> {{ subjects }}</p>
"""

_template = _env.from_string(REQUEST_TEMPLATE)


def render_request_email(req: SubmissionRequest) -> str:
    return _template.render(**req.model_dump()).strip()
