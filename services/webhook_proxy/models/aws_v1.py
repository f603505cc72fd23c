# services/webhook_proxy/models/aws_v1.py

"""
Pydantic models for AWS API Gateway v1 (REST API) Lambda proxy integration.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/set-up-lambda-proxy-integrations.html#api-gateway-simple-proxy-for-lambda-input-format

The inbound event is parsed leniently: API Gateway sends null for absent maps
and body, and the webhook proxy only reads the request parts it needs.
"""

from typing import Dict, Any, Optional, List
from pydantic import BaseModel, ConfigDict, Field


class APIGatewayProxyEvent(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Event Structure

    Only the request-shaped fields are modelled; requestContext and the rest
    are kept as extra data.
    """

    resource: Optional[str] = None
    path: Optional[str] = None
    httpMethod: Optional[str] = None
    headers: Optional[Dict[str, str]] = None
    multiValueHeaders: Optional[Dict[str, List[str]]] = None
    queryStringParameters: Optional[Dict[str, str]] = None
    multiValueQueryStringParameters: Optional[Dict[str, List[str]]] = None
    pathParameters: Optional[Dict[str, str]] = None
    stageVariables: Optional[Dict[str, str]] = None
    requestContext: Optional[Dict[str, Any]] = None
    body: Optional[str] = None
    isBase64Encoded: bool = False

    model_config = ConfigDict(extra="allow")


class APIGatewayProxyResponse(BaseModel):
    """
    AWS API Gateway Proxy Integration (v1) Response Structure

    Use model_dump() to obtain the dict returned from a Lambda handler.
    """

    statusCode: int
    body: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    isBase64Encoded: bool = False
