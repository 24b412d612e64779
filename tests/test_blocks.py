"""블록/열 조회 및 생성 API 테스트.

Block and row API tests — Provisioning, lookups and the two remaining-stock
computations.
"""

from httpx import AsyncClient

from tests.conftest import API, check_in_body, check_out_body

URL = f"{API}/blocks"


async def _consume(client: AsyncClient, row: str, stock_count: int | None) -> None:
    await client.post(f"{API}/rows/check-in", json=check_in_body(row=row))
    await client.post(f"{API}/rows/check-out", json=check_out_body(row=row, stock_count=stock_count))


class TestBlockCreate:
    """블록 생성 테스트."""

    async def test_create_block(self, client: AsyncClient):
        """블록 생성 성공 — 열 순서 유지."""
        res = await client.post(URL, json={
            "block_name": "B2",
            "total_stocks": 300,
            "rows": [
                {"row_number": "10", "initial_stock_count": 100},
                {"row_number": "2", "initial_stock_count": 150},
            ],
        })
        assert res.status_code == 201
        data = res.json()
        assert data["block_name"] == "B2"
        assert data["total_stocks"] == 300
        assert [r["row_number"] for r in data["rows"]] == ["10", "2"]
        assert data["rows"][0]["available_stock"] == 100
        assert data["rows"][0]["remaining_stock_count"] is None

    async def test_duplicate_block(self, client: AsyncClient, block):
        """같은 이름의 블록 생성 시 409."""
        res = await client.post(URL, json={"block_name": "A1", "total_stocks": 10})
        assert res.status_code == 409

    async def test_rows_exceed_allotment(self, client: AsyncClient):
        """열 초기 재고 합이 블록 할당량 초과 시 400."""
        res = await client.post(URL, json={
            "block_name": "B3",
            "total_stocks": 100,
            "rows": [
                {"row_number": "1", "initial_stock_count": 60},
                {"row_number": "2", "initial_stock_count": 60},
            ],
        })
        assert res.status_code == 400

    async def test_duplicate_row_numbers(self, client: AsyncClient):
        """블록 내 열 번호 중복 시 400."""
        res = await client.post(URL, json={
            "block_name": "B4",
            "total_stocks": 100,
            "rows": [
                {"row_number": "1", "initial_stock_count": 10},
                {"row_number": "1", "initial_stock_count": 10},
            ],
        })
        assert res.status_code == 400

    async def test_negative_total_rejected(self, client: AsyncClient):
        res = await client.post(URL, json={"block_name": "B5", "total_stocks": -1})
        assert res.status_code == 422


class TestBlockRead:
    """블록 조회 테스트."""

    async def test_list_blocks(self, client: AsyncClient, block):
        res = await client.get(URL)
        assert res.status_code == 200
        assert [b["block_name"] for b in res.json()] == ["A1"]

    async def test_list_blocks_empty(self, client: AsyncClient):
        res = await client.get(URL)
        assert res.status_code == 200
        assert res.json() == []

    async def test_get_block_by_name(self, client: AsyncClient, block):
        res = await client.get(f"{URL}/A1")
        assert res.status_code == 200
        data = res.json()
        assert data["total_stocks"] == 200
        assert [r["row_number"] for r in data["rows"]] == ["5", "6"]
        assert "daily_entries" not in data["rows"][0]

    async def test_get_block_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/Z9")
        assert res.status_code == 404

    async def test_all_block_data_includes_entries(self, client: AsyncClient, block):
        """블록 전체 데이터 — 열별 체크아웃 기록 포함."""
        await _consume(client, "5", 12)

        res = await client.get(f"{URL}/A1/all")
        assert res.status_code == 200
        rows = {r["row_number"]: r for r in res.json()["rows"]}
        assert len(rows["5"]["daily_entries"]) == 1
        assert rows["5"]["daily_entries"][0]["stock_count"] == 12
        assert rows["6"]["daily_entries"] == []

    async def test_all_block_data_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/Z9/all")
        assert res.status_code == 404


class TestRemainingStocks:
    """잔여 재고 계산 테스트."""

    async def test_block_remaining_before_any_check_out(self, client: AsyncClient, block):
        res = await client.get(f"{URL}/A1/remaining-stocks")
        assert res.status_code == 200
        assert res.json() == {
            "blockName": "A1",
            "totalStocks": 200,
            "usedStocks": 0,
            "remainingStocks": 200,
        }

    async def test_block_remaining_after_check_outs(self, client: AsyncClient, block):
        """블록 잔여 재고 = 전체 - 열별 소비 합."""
        await _consume(client, "5", 30)
        await _consume(client, "6", 20)

        data = (await client.get(f"{URL}/A1/remaining-stocks")).json()
        assert data["usedStocks"] == 50
        assert data["remainingStocks"] == 150

    async def test_block_and_row_figures_diverge(self, client: AsyncClient, block):
        """블록 기준 잔여 재고와 열 잔여 재고 합은 다를 수 있음."""
        await _consume(client, "5", 30)

        block_remaining = (await client.get(f"{URL}/A1/remaining-stocks")).json()["remainingStocks"]
        row_5 = (await client.get(f"{API}/rows/5", params={"block_name": "A1"})).json()
        row_6 = (await client.get(f"{API}/rows/6", params={"block_name": "A1"})).json()

        assert block_remaining == 170
        assert row_5["available_stock"] + row_6["available_stock"] == 120

    async def test_block_remaining_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/Z9/remaining-stocks")
        assert res.status_code == 404

    async def test_row_remaining_attributes_own_consumption(self, client: AsyncClient, block):
        """열 잔여 재고 = 전체 - 다른 열의 소비 합."""
        await _consume(client, "5", 30)
        await _consume(client, "6", 20)

        res = await client.get(f"{API}/rows/5/remaining-stocks", params={"block_name": "A1"})
        assert res.status_code == 200
        assert res.json() == {"blockName": "A1", "rowNumber": "5", "remainingStocks": 180}

    async def test_row_remaining_without_block_name(self, client: AsyncClient, block):
        """블록 미지정 시 해당 열을 가진 블록을 찾음."""
        await _consume(client, "6", 20)

        res = await client.get(f"{API}/rows/5/remaining-stocks")
        assert res.status_code == 200
        assert res.json()["remainingStocks"] == 180

    async def test_row_remaining_not_found(self, client: AsyncClient, block):
        res = await client.get(f"{API}/rows/99/remaining-stocks")
        assert res.status_code == 404


class TestRowRead:
    """열 조회 테스트."""

    async def test_get_row_without_block_name(self, client: AsyncClient, block):
        res = await client.get(f"{API}/rows/6")
        assert res.status_code == 200
        data = res.json()
        assert data["block_name"] == "A1"
        assert data["initial_stock_count"] == 50
        assert data["available_stock"] == 50

    async def test_get_row_picks_first_block_by_name(self, client: AsyncClient, block):
        """열 번호가 여러 블록에 있으면 이름순 첫 블록."""
        await client.post(URL, json={
            "block_name": "A0",
            "total_stocks": 10,
            "rows": [{"row_number": "5", "initial_stock_count": 10}],
        })

        res = await client.get(f"{API}/rows/5")
        assert res.json()["block_name"] == "A0"

        res = await client.get(f"{API}/rows/5", params={"block_name": "A1"})
        assert res.json()["block_name"] == "A1"

    async def test_get_row_not_found(self, client: AsyncClient, block):
        res = await client.get(f"{API}/rows/99")
        assert res.status_code == 404

    async def test_get_row_unknown_block(self, client: AsyncClient, block):
        res = await client.get(f"{API}/rows/5", params={"block_name": "Z9"})
        assert res.status_code == 404


class TestWorkers:
    """작업자 조회 테스트."""

    async def test_no_workers(self, client: AsyncClient):
        res = await client.get(f"{API}/workers")
        assert res.status_code == 200
        assert res.json() == []

    async def test_unknown_worker(self, client: AsyncClient):
        res = await client.get(f"{API}/workers/nobody")
        assert res.status_code == 404
