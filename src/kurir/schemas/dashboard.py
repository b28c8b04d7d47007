"""Dashboard schemas."""

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    totalOrders: int
    activeOrders: int
    totalCustomers: int
    completedToday: int
    todayRevenue: float
    totalRevenue: float
