import logging

from django.db import DatabaseError
from django.utils import timezone
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from apps.merchants.models import Product
from apps.transactions.models import Transaction
from .exceptions import AnalyticsServiceError, DataUnavailableError
from .serializers import (
    # Input serializers
    ReportQuerySerializer,
    PeriodQuerySerializer,
    TopMerchantsQuerySerializer,
    ProductRollupQuerySerializer,
    # Response serializers
    ReportResponseSerializer,
    WindowMetricsSerializer,
    TopMerchantsResponseSerializer,
    ProductRollupSerializer,
    ProductRollupResponseSerializer,
    ErrorSerializer,
    UnavailableErrorSerializer,
)
from .services import (
    between_dates,
    build_report,
    compute_many,
    has_related,
    low_stock,
    merchant_leaderboard,
    this_period,
    with_rollup,
)
from .services.report import TRANSACTION_METRICS

logger = logging.getLogger(__name__)


def _data_unavailable(exc):
    logger.error("Analytics query failed: %s", exc, exc_info=True)
    return DataUnavailableError()


@extend_schema(
    parameters=[
        OpenApiParameter('as_of', OpenApiTypes.DATETIME, description='Compute windows as of this moment (defaults to now)'),
    ],
    responses={
        200: ReportResponseSerializer,
        400: ErrorSerializer,
        503: UnavailableErrorSerializer,
    },
    description="Transaction statistics: today's and this month's totals with month-over-month change, customer and merchant counts, top merchants.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def transaction_stats(request):
    """Transaction statistics report - thin HTTP handler."""
    query_serializer = ReportQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    now = query_serializer.validated_data.get('as_of') or timezone.now()

    try:
        report = build_report(now=now)
    except DatabaseError as e:
        raise _data_unavailable(e) from e

    return Response(ReportResponseSerializer(report.to_dict()).data)


@extend_schema(
    parameters=[
        OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
        OpenApiParameter('start_date', OpenApiTypes.DATE, description='Start date, inclusive (YYYY-MM-DD)'),
        OpenApiParameter('end_date', OpenApiTypes.DATE, description='End date, inclusive (YYYY-MM-DD)'),
    ],
    responses={
        200: WindowMetricsSerializer,
        400: ErrorSerializer,
        503: UnavailableErrorSerializer,
    },
    description="Transaction count, amount and points awarded over a month or date range. Defaults to the current month.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def transaction_metrics(request):
    """Transaction totals over a custom window - thin HTTP handler."""
    query_serializer = PeriodQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        if params.get('start_date'):
            window = between_dates(params['start_date'], params['end_date'])
        else:
            window = this_period(timezone.now())
        data = compute_many(TRANSACTION_METRICS, Transaction.objects.all(), window)
    except AnalyticsServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )
    except DatabaseError as e:
        raise _data_unavailable(e) from e

    return Response(WindowMetricsSerializer({
        'start': window.start,
        'end': window.end,
        **data,
    }).data)


@extend_schema(
    parameters=[
        OpenApiParameter('metric', OpenApiTypes.STR, description="Ranking metric: 'amount', 'transactions'", default='amount'),
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results', default=3),
    ],
    responses={
        200: TopMerchantsResponseSerializer,
        400: ErrorSerializer,
        503: UnavailableErrorSerializer,
    },
    description="Merchants ranked by total transaction amount or transaction count.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def top_merchants(request):
    """Merchant leaderboard - thin HTTP handler."""
    query_serializer = TopMerchantsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    try:
        results = merchant_leaderboard(limit=params['limit'], by=params['metric'])
    except AnalyticsServiceError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )
    except DatabaseError as e:
        raise _data_unavailable(e) from e

    return Response(TopMerchantsResponseSerializer({
        'metric': params['metric'],
        'results': results,
    }).data)


@extend_schema(
    parameters=[
        OpenApiParameter('merchant', OpenApiTypes.INT, description='Only products of this merchant'),
        OpenApiParameter('low_stock', OpenApiTypes.BOOL, description='Only products at or below the low-stock threshold'),
        OpenApiParameter('has_points_rules', OpenApiTypes.BOOL, description='Only products with at least one points rule'),
        OpenApiParameter('ordering', OpenApiTypes.STR, description='Sort key, prefix with - for descending', default='-created_at'),
    ],
    responses={
        200: ProductRollupResponseSerializer,
        400: ErrorSerializer,
        503: UnavailableErrorSerializer,
    },
    description="Products with their points rule count, filterable by low stock and rule presence.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAdminUser])
def product_rollups(request):
    """Product listing with points rule counts - thin HTTP handler."""
    query_serializer = ProductRollupQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    products = Product.objects.select_related('merchant')
    if params.get('merchant'):
        products = products.filter(merchant_id=params['merchant'])
    if params['low_stock']:
        products = low_stock(products)
    if params['has_points_rules']:
        products = has_related(products, 'points_rules')
    products = with_rollup(products, 'points_rules').order_by(params['ordering'], 'pk')

    try:
        rows = list(products)
    except DatabaseError as e:
        raise _data_unavailable(e) from e

    return Response({
        'count': len(rows),
        'results': ProductRollupSerializer(rows, many=True).data,
    })
