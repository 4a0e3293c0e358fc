import json
import unittest

from app import app as flask_app  # noqa: E402


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, url, payload=None):
        return self.client.post(url, data=json.dumps(payload or {}), content_type="application/json")

    def test_given_new_game_when_posted_then_returns_state_and_legal_moves(self):
        r = self._post("/api/new")
        self.assertEqual(r.status_code, 200)
        data = r.get_json()
        self.assertTrue(data["ok"])
        state = data["state"]
        self.assertEqual(state["current"], "B")
        self.assertEqual(state["moveNumber"], 1)
        self.assertFalse(state["terminal"])
        self.assertIsNone(state["result"])
        self.assertEqual(state["score"], {"black": 2, "white": 2})
        self.assertEqual(data["legalMoves"], [[2, 3], [3, 2], [4, 5], [5, 4]])

        r2 = self._post("/api/legal", {"state": state})
        self.assertEqual(r2.status_code, 200)
        self.assertEqual(r2.get_json()["legalMoves"], data["legalMoves"])

    def test_given_legal_move_when_posted_then_new_state_and_flipped(self):
        state = self._post("/api/new").get_json()["state"]
        r = self._post("/api/move", {"state": state, "move": [2, 3]})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertTrue(d["ok"])
        self.assertEqual(d["flipped"], [[3, 3]])
        self.assertEqual(d["state"]["current"], "W")
        self.assertEqual(d["state"]["moveNumber"], 2)
        self.assertEqual(d["state"]["score"], {"black": 4, "white": 1})
        self.assertEqual(d["legalMoves"], [[2, 2], [2, 4], [4, 2]])

    def test_given_sequence_of_moves_when_chained_through_api_then_turns_alternate(self):
        d = self._post("/api/new").get_json()
        for expected in ("W", "B", "W", "B"):
            d = self._post("/api/move", {"state": d["state"], "move": d["legalMoves"][0]}).get_json()
            self.assertTrue(d["ok"])
            self.assertEqual(d["state"]["current"], expected)
        self.assertEqual(d["state"]["moveNumber"], 5)


if __name__ == "__main__":
    unittest.main(verbosity=2)
