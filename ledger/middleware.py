import json
import logging

logger = logging.getLogger(__name__)

MASKED_FIELDS = ("password", "token", "refresh", "access")
LOGGED_RESPONSE_TYPES = ("application/json", "text/")


def mask_credentials(body: str) -> str:
    """Replace credential values in a JSON body with ``***``."""
    try:
        payload = json.loads(body)
    except ValueError:
        return body
    if not isinstance(payload, dict):
        return body
    for key in MASKED_FIELDS:
        if key in payload:
            payload[key] = "***"
    return json.dumps(payload)


class RequestResponseLoggingMiddleware:
    """
    Logs each API request method, path and body, and the response status and
    content. Credentials are masked and binary bodies are not dumped.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request_body = ""
        content_type = request.META.get("CONTENT_TYPE", "")

        if "multipart/form-data" in content_type:
            request_body = "<Multipart form data - body not logged>"
        elif request.method in ("POST", "PUT", "PATCH") and request.body:
            try:
                request_body = mask_credentials(request.body.decode("utf-8"))
            except UnicodeDecodeError:
                request_body = "<Could not decode body>"

        logger.info(
            "API Request: %s %s Body: %s",
            request.method,
            request.get_full_path(),
            request_body,
        )

        response = self.get_response(request)

        response_type = response.get("Content-Type", "")
        if getattr(response, "streaming", False):
            response_content = "<Streaming content>"
        elif response_type.startswith(LOGGED_RESPONSE_TYPES):
            try:
                response_content = mask_credentials(response.content.decode("utf-8"))
            except UnicodeDecodeError:
                response_content = "<Could not decode content>"
        else:
            response_content = f"<Content-Type: {response_type}>"

        logger.info(
            "API Response: %s %s Status: %s Content: %s",
            request.method,
            request.get_full_path(),
            response.status_code,
            response_content,
        )
        return response
