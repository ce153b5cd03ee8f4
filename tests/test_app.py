import json
import unittest

from app import app as flask_app
from app import json_to_state, state_to_json
from game import Board, Move, Player


class TestStateJson(unittest.TestCase):
    def test_given_board_when_serialized_and_loaded_then_rows_and_turn_preserved(self):
        board = Board.from_lengths([2, 1])
        board.apply(Move(0, 1))
        board.next_turn()
        data = state_to_json(board)
        self.assertEqual(data, {
            "rows": [{"length": 2, "consumedBy": ["first"]}, {"length": 1, "consumedBy": []}],
            "turn": "second",
        })
        again = json_to_state(data)
        self.assertEqual(again.remaining_counts(), [1, 1])
        self.assertEqual(again.rows[0].consumed_by, [Player.FIRST])
        self.assertEqual(again.current_turn, Player.SECOND)

    def test_given_overeaten_row_when_loading_then_value_error(self):
        with self.assertRaises(ValueError):
            json_to_state({"rows": [{"length": 1, "consumedBy": ["first", "second"]}], "turn": "first"})


class TestFlaskAPI(unittest.TestCase):
    def setUp(self):
        self.client = flask_app.test_client()

    def _post(self, path, payload):
        return self.client.post(path, data=json.dumps(payload), content_type="application/json")

    def _new(self, lengths):
        r = self._post("/api/new", {"lengths": lengths})
        self.assertEqual(r.status_code, 200)
        return r.get_json()

    def test_given_lengths_when_new_game_then_state_legal_moves_and_nim_sum(self):
        d = self._new([2, 1])
        self.assertTrue(d["ok"])
        self.assertEqual(d["state"]["turn"], "first")
        self.assertEqual(d["legalMoves"], [[0, 1], [0, 2], [1, 1]])
        self.assertEqual(d["nimSum"], 3)
        self.assertIsNone(d["winner"])

    def test_given_seed_when_new_random_game_then_reproducible(self):
        payload = {"rows": 4, "maxRowLength": 5, "seed": 99}
        s1 = self._post("/api/new", payload).get_json()["state"]
        s2 = self._post("/api/new", payload).get_json()["state"]
        self.assertEqual(s1, s2)
        self.assertEqual(len(s1["rows"]), 4)
        self.assertTrue(all(1 <= row["length"] <= 5 for row in s1["rows"]))

    def test_given_bad_parameters_when_new_game_then_400(self):
        self.assertEqual(self._post("/api/new", {"rows": "many"}).status_code, 400)
        self.assertEqual(self._post("/api/new", {"lengths": [300]}).status_code, 400)
        self.assertEqual(self._post("/api/new", {"lengths": [1], "turn": "third"}).status_code, 400)

    def test_given_move_when_posted_then_applied_and_turn_advanced(self):
        state = self._new([2, 1])["state"]
        r = self._post("/api/move", {"state": state, "move": [0, 1]})
        self.assertEqual(r.status_code, 200)
        d = r.get_json()
        self.assertEqual(d["move"], [0, 1])
        self.assertEqual(d["state"]["rows"][0]["consumedBy"], ["first"])
        self.assertEqual(d["state"]["turn"], "second")
        self.assertEqual(d["nimSum"], 0)

    def test_given_selected_square_when_posted_then_eats_from_right_end(self):
        state = self._new([2, 1])["state"]
        d = self._post("/api/move", {"state": state, "row": 0, "square": 0}).get_json()
        self.assertEqual(d["move"], [0, 2])
        self.assertEqual(d["state"]["rows"][0]["consumedBy"], ["first", "first"])

    def test_given_eaten_square_when_posted_then_400(self):
        state = {"rows": [{"length": 2, "consumedBy": ["first"]}], "turn": "second"}
        r = self._post("/api/move", {"state": state, "row": 0, "square": 1})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.get_json()["legalMoves"], [[0, 1]])

    def test_given_illegal_move_when_posted_then_400_with_legal_moves(self):
        state = self._new([2, 1])["state"]
        r = self._post("/api/move", {"state": state, "move": [0, 5]})
        self.assertEqual(r.status_code, 400)
        d = r.get_json()
        self.assertFalse(d["ok"])
        self.assertIn("Illegal move", d["error"])
        self.assertEqual(d["legalMoves"], [[0, 1], [0, 2], [1, 1]])

    def test_given_bad_state_when_posted_then_400(self):
        for state in (
            {"rows": [{"length": -1}]},
            {"rows": [{"length": 1, "consumedBy": ["purple"]}]},
            {"turn": "first"},
        ):
            with self.subTest(state=state):
                r = self._post("/api/legal", {"state": state})
                self.assertEqual(r.status_code, 400)
                self.assertIn("bad state", r.get_json()["error"])
        self.assertEqual(self._post("/api/move", {"move": [0, 1]}).status_code, 400)

    def test_given_non_object_body_when_posted_then_400(self):
        for path in ("/api/new", "/api/legal", "/api/move", "/api/ai", "/api/hint"):
            with self.subTest(path=path):
                r = self._post(path, [1])
                self.assertEqual(r.status_code, 400)
                self.assertEqual(r.get_json()["error"], "body must be a JSON object")

    def test_given_unusable_seed_when_posted_then_400(self):
        state = {"rows": [{"length": 2, "consumedBy": []}], "turn": "first"}
        r = self._post("/api/ai", {"state": state, "seed": {"a": 1}})
        self.assertEqual(r.status_code, 400)
        self.assertIn("bad seed", r.get_json()["error"])
        r = self._post("/api/new", {"rows": 2, "seed": [1, 2]})
        self.assertEqual(r.status_code, 400)
        self.assertIn("bad parameters", r.get_json()["error"])

    def test_given_winning_position_when_ai_moves_then_optimal_move_and_turn_advanced(self):
        state = self._new([2, 1])["state"]
        d = self._post("/api/ai", {"state": state}).get_json()
        self.assertEqual(d["move"], [0, 1])
        self.assertEqual(d["state"]["turn"], "second")
        self.assertEqual(d["nimSum"], 0)

    def test_given_last_square_when_ai_eats_it_then_ai_wins(self):
        state = {"rows": [{"length": 1, "consumedBy": []}], "turn": "second"}
        d = self._post("/api/ai", {"state": state, "seed": 1}).get_json()
        self.assertEqual(d["winner"], "second")
        self.assertEqual(d["legalMoves"], [])

    def test_given_empty_board_when_ai_called_then_409(self):
        state = {"rows": [{"length": 1, "consumedBy": ["first"]}], "turn": "second"}
        r = self._post("/api/ai", {"state": state})
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.get_json()["error"], "Game is over")

    def test_given_positions_when_hint_requested_then_optimal_move_or_null(self):
        d = self._post("/api/hint", {"state": self._new([2, 1])["state"]}).get_json()
        self.assertEqual(d["move"], [0, 1])
        self.assertEqual(d["nimSum"], 3)
        d = self._post("/api/hint", {"state": self._new([1, 1])["state"]}).get_json()
        self.assertIsNone(d["move"])
        self.assertEqual(d["nimSum"], 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
