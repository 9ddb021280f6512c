from fastapi import HTTPException


class PaymentGatewayException(HTTPException):
    def __init__(self, message: str = "Payment gateway error"):
        super().__init__(status_code=502, detail=message)


class PaymentGatewayTimeoutException(HTTPException):
    def __init__(self, message: str = "Payment gateway timeout"):
        super().__init__(status_code=504, detail=message)


class PaymentConfigurationException(HTTPException):
    def __init__(self, message: str = "Payment service is not configured"):
        super().__init__(status_code=503, detail=message)
