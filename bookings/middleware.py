class ReservationHeadersMiddleware:
    """Response headers for the reservation flow, which shows card details."""

    PROTECTED_PREFIX = '/reserva/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)

        response['X-Content-Type-Options'] = 'nosniff'
        response['Referrer-Policy'] = 'strict-origin-when-cross-origin'

        # Step pages and previews must never be cached by the browser or a proxy
        if request.path.startswith(self.PROTECTED_PREFIX):
            response['Cache-Control'] = 'no-store, private'
            response['Pragma'] = 'no-cache'

        return response
