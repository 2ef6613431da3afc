"""
Dining table registry tests: TableService and the /api/tables/ endpoints.
"""
import uuid
import pytest
from rest_framework import status

from tables.exceptions import TableNotFound, TableUnavailable
from tables.models import DiningTable
from tables.services import TableService


@pytest.mark.django_db
class TestTableService:

    def test_check_available_returns_table(self, table):
        assert TableService.check_available(table.id) == table

    def test_check_available_rejects_occupied(self, occupied_table):
        with pytest.raises(TableUnavailable):
            TableService.check_available(occupied_table.id)

    @pytest.mark.parametrize("table_id", [uuid.uuid4(), "T1"])
    def test_unknown_table(self, table, table_id):
        with pytest.raises(TableNotFound):
            TableService.get_table(table_id)

    def test_occupy_available_table(self, table):
        TableService.occupy(table)

        table.refresh_from_db()
        assert table.status == DiningTable.Status.OCCUPIED

    def test_occupy_only_flips_available_tables(self, table):
        """A stale in-memory 'available' does not matter; the stored status decides."""
        DiningTable.objects.filter(id=table.id).update(status=DiningTable.Status.MAINTENANCE)

        with pytest.raises(TableUnavailable) as exc_info:
            TableService.occupy(table)

        assert exc_info.value.get_details()["table_status"] == "maintenance"
        table.refresh_from_db()
        assert table.status == DiningTable.Status.MAINTENANCE

    def test_set_status(self, occupied_table):
        TableService.set_status(occupied_table, DiningTable.Status.AVAILABLE)

        occupied_table.refresh_from_db()
        assert occupied_table.status == DiningTable.Status.AVAILABLE


@pytest.mark.django_db
class TestTablesAPI:

    def test_list_tables(self, waiter_client, table, occupied_table):
        response = waiter_client.get('/api/tables/')

        assert response.status_code == status.HTTP_200_OK
        assert [row['table_number'] for row in response.data['results']] == ['T1', 'T2']
        assert 'created_at' not in response.data['results'][0]

    def test_filter_by_status(self, waiter_client, table, occupied_table):
        response = waiter_client.get('/api/tables/?status=available')

        assert [row['table_number'] for row in response.data['results']] == ['T1']

    def test_filter_by_capacity(self, waiter_client, table, occupied_table):
        response = waiter_client.get('/api/tables/?min_capacity=3')

        assert [row['table_number'] for row in response.data['results']] == ['T1']

    def test_manager_creates_table(self, manager_client):
        response = manager_client.post('/api/tables/', {'table_number': 'P1', 'capacity': 6}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'available'

    def test_waiter_cannot_create_table(self, waiter_client):
        response = waiter_client.post('/api/tables/', {'table_number': 'P1', 'capacity': 6}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_capacity_must_be_positive(self, manager_client):
        response = manager_client.post('/api/tables/', {'table_number': 'P1', 'capacity': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'capacity' in response.data

    def test_table_number_is_unique(self, manager_client, table):
        response = manager_client.post('/api/tables/', {'table_number': 'T1', 'capacity': 2}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'table_number' in response.data

    def test_waiter_frees_a_table(self, waiter_client, occupied_table):
        response = waiter_client.patch(
            f'/api/tables/{occupied_table.id}/status/', {'status': 'available'}, format='json'
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'available'
        occupied_table.refresh_from_db()
        assert occupied_table.status == DiningTable.Status.AVAILABLE

    def test_invalid_table_status(self, waiter_client, table):
        response = waiter_client.patch(f'/api/tables/{table.id}/status/', {'status': 'dirty'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unknown_table(self, waiter_client):
        response = waiter_client.get(f'/api/tables/{uuid.uuid4()}/')
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_table_with_orders_keeps_them_when_deleted(self, manager_client, order, table):
        response = manager_client.delete(f'/api/tables/{table.id}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        order.refresh_from_db()
        assert order.table is None
