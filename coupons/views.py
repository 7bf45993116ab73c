import logging
import re

from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .exceptions import InvalidInput
from .models import Coupon
from .repository import get_repository
from .serializers import CouponSerializer, CreateCouponSerializer

logger = logging.getLogger(__name__)

COUPON_ID_PATTERN = re.compile(r"-?[0-9]+")


def envelope(message, data=None, success=True):
    return {"success": success, "message": message, "data": data}


def parse_coupon_id(raw):
    # ASCII digits with an optional leading minus
    if not isinstance(raw, str) or not raw.isascii() or not COUPON_ID_PATTERN.fullmatch(raw):
        raise InvalidInput(f'invalid coupon id "{raw}"')
    return int(raw)


@api_view(['GET', 'POST'])
def coupon_collection(request):
    logger.info("Coupon handler, handling %s request", request.method)
    if request.method == 'POST':
        return create_coupon(request)
    # no listing yet
    return Response(envelope("Coupon Retrieved Successfully"))


@api_view(['GET', 'PUT', 'DELETE'])
def coupon_detail(request, coupon_id):
    logger.info("Coupon handler, handling %s request", request.method)
    if request.method == 'PUT':
        return update_coupon(request, coupon_id)
    if request.method == 'DELETE':
        return delete_coupon(request, coupon_id)
    return get_coupon(request, coupon_id)


def get_coupon(request, coupon_id):
    coupon = get_repository().get_by_id(parse_coupon_id(coupon_id))
    return Response(envelope("Coupon Retrieved Successfully", CouponSerializer(coupon).data))


def create_coupon(request):
    serializer = CreateCouponSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    coupon = get_repository().create(Coupon.from_request(serializer.validated_data))
    return Response(
        envelope("Coupon Created Successfully", CouponSerializer(coupon).data),
        status=status.HTTP_201_CREATED,
    )


def update_coupon(request, coupon_id):
    # TODO: persist partial updates once CouponRepository.update exists
    logger.info("Update coupon %s: nothing persisted", coupon_id)
    return Response(envelope("Coupon Updated Successfully"))


def delete_coupon(request, coupon_id):
    # TODO: remove the row once CouponRepository.delete exists
    logger.info("Delete coupon %s: nothing persisted", coupon_id)
    return Response(envelope("Coupon Deleted Successfully"))
