from flask import Blueprint, current_app, make_response, request

from contact_relay.relay import handle_event

contact_bp = Blueprint('contact', __name__)

# Every method reaches the relay so it can answer 403/405 itself
RELAY_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def event_from_request(req):
    """Shape a Flask request like an API Gateway proxy event."""
    return {
        'httpMethod': req.method,
        'headers': dict(req.headers),
        'body': req.get_data(as_text=True),
        'isBase64Encoded': False,
    }


@contact_bp.route('/contact', methods=RELAY_METHODS, provide_automatic_options=False)
def contact():
    relay = current_app.extensions['contact_relay']
    result = handle_event(event_from_request(request), relay['settings'], relay['mailer'])
    response = make_response(result.body, result.status_code)
    response.headers.update(result.headers)
    return response


@contact_bp.route('/healthz')
def healthz():
    return {'status': 'ok'}
